# aspire/client/attempt.py
"""
A candidate's pass through one test, held on the client.

    not-started --start()--> in-progress --submit()/timer--> submitted

Answers and the remaining seconds are written to an ``AttemptStore`` after
every change, so a restarted client resumes the same attempt and countdown.
The stored copy is removed only once the server has accepted the submission.
"""
from __future__ import annotations

import json
import logging
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .api import ApiError

logger = logging.getLogger(__name__)

SubmitFn = Callable[[int, List[dict]], Any]


class AttemptState(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    SUBMITTED = "submitted"


class SubmissionError(Exception):
    pass


class AttemptStore:
    """One JSON file per test id; the client-side counterpart of localStorage."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, test_id: int) -> Path:
        return self.directory / f"test-{test_id}.json"

    def load(self, test_id: int) -> Optional[dict]:
        p = self._path(test_id)
        if not p.exists():
            return None
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("discarding unreadable attempt file %s", p)
            return None

    def save(self, test_id: int, data: dict) -> None:
        tmp = self._path(test_id).with_suffix(".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.replace(self._path(test_id))

    def clear(self, test_id: int) -> None:
        self._path(test_id).unlink(missing_ok=True)


class Attempt:
    def __init__(self, test_id: int, duration_minutes: int, store: AttemptStore, submit: SubmitFn):
        self.test_id = test_id
        self.duration_seconds = int(duration_minutes) * 60
        self.store = store
        self._submit = submit

        self.state = AttemptState.NOT_STARTED
        self.answers: Dict[int, str] = {}
        self.time_left = self.duration_seconds
        self.result: Any = None
        self._in_flight = False
        self._auto_fired = False

    # --- persistence ----------------------------------------------------------
    def _persist(self) -> None:
        self.store.save(
            self.test_id,
            {
                "answers": {str(k): v for k, v in self.answers.items()},
                "timeLeft": self.time_left,
            },
        )

    def _require_in_progress(self) -> None:
        if self.state is not AttemptState.IN_PROGRESS:
            raise RuntimeError(f"attempt is {self.state.value}")

    # --- lifecycle ------------------------------------------------------------
    def start(self) -> bool:
        """Begin, or resume a saved attempt. Returns True when resumed."""
        if self.state is not AttemptState.NOT_STARTED:
            raise RuntimeError(f"attempt is {self.state.value}")

        saved = self.store.load(self.test_id)
        resumed = saved is not None
        if saved:
            self.answers = {int(k): v for k, v in (saved.get("answers") or {}).items()}
            self.time_left = max(0, int(saved.get("timeLeft", self.duration_seconds)))

        self.state = AttemptState.IN_PROGRESS
        self._persist()
        return resumed

    def answer(self, question_id: int, option: str) -> None:
        self._require_in_progress()
        self.answers[int(question_id)] = option
        self._persist()

    def tick(self) -> None:
        """One second of the countdown; hitting zero submits once, unprompted."""
        if self.state is not AttemptState.IN_PROGRESS or self._in_flight:
            return
        if self.time_left > 0:
            self.time_left -= 1
            self._persist()
        if self.time_left == 0 and not self._auto_fired:
            self._auto_fired = True
            logger.info("time is up on test %s; submitting", self.test_id)
            self.submit()

    def payload(self) -> List[dict]:
        return [
            {"questionId": qid, "selectedOption": option}
            for qid, option in sorted(self.answers.items())
        ]

    def submit(self) -> Any:
        """
        Post the answers. Returns the server's result, or None if a submission
        is already running or done. On failure the saved attempt is kept and
        SubmissionError is raised; nothing is retried.
        """
        if self._in_flight or self.state is AttemptState.SUBMITTED:
            return None
        self._require_in_progress()

        self._in_flight = True
        try:
            result = self._submit(self.test_id, self.payload())
        except ApiError as e:
            logger.error("submitting test %s failed: %s", self.test_id, e)
            raise SubmissionError(f"There was an error submitting your test: {e.message}") from e
        finally:
            self._in_flight = False

        self.store.clear(self.test_id)
        self.state = AttemptState.SUBMITTED
        self.result = result
        return result

    def run(self, sleep: Callable[[float], None] = time.sleep) -> Any:
        """Drive the countdown until the attempt is submitted."""
        while self.state is AttemptState.IN_PROGRESS:
            if self.time_left == 0 and self._auto_fired:
                # timer already fired and failed; only a manual submit() is left
                break
            sleep(1)
            self.tick()
        return self.result
