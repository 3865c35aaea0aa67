# aspire/email_templates.py
from html import escape

OTP_VALID_MINUTES = 10


def compose_otp_email(*, otp: str, brand: str = "AspireClasses") -> tuple[str, str]:
    subject = "Your One-Time Password (OTP) for Verification"
    html = f"""<!doctype html><html><body style="font-family:Arial,sans-serif;">
  <div style="max-width:600px;margin:auto;padding:20px;border:1px solid #ddd;border-radius:10px;">
    <h2 style="text-align:center;color:#333;">OTP Verification</h2>
    <p style="font-size:16px;">Hello,</p>
    <p style="font-size:16px;">Thank you for registering. Please use the following One-Time Password (OTP) to complete your account setup:</p>
    <p style="text-align:center;font-size:24px;font-weight:bold;color:#444;letter-spacing:4px;padding:10px;background-color:#f2f2f2;border-radius:5px;">
      {escape(otp)}
    </p>
    <p style="font-size:14px;color:#777;">This OTP is valid for {OTP_VALID_MINUTES} minutes. Please do not share it with anyone.</p>
    <hr style="border:none;border-top:1px solid #ddd;">
    <p style="font-size:16px;">Best Regards,<br/>The {escape(brand)} Team</p>
  </div>
</body></html>"""
    return subject, html
