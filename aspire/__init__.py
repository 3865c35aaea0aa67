"""
aspire package

AspireClasses test-preparation API. Run it with:

    uvicorn aspire.main:create_app --factory

Do NOT put runtime logic here.
"""
