from pydantic import BaseModel, constr, field_validator


class SendOTPRequest(BaseModel):
    phone: constr(strip_whitespace=True, pattern=r"^[6-9]\d{9}$")

    @field_validator("phone", mode="before")
    @classmethod
    def _digits_as_text(cls, v):
        return str(v) if isinstance(v, int) else v


class VerifyOTPRequest(BaseModel):
    phone: constr(strip_whitespace=True, pattern=r"^[6-9]\d{9}$")
    code: constr(strip_whitespace=True, pattern=r"^\d{6}$")

    @field_validator("phone", "code", mode="before")
    @classmethod
    def _digits_as_text(cls, v):
        return str(v) if isinstance(v, int) else v


class RefreshRequest(BaseModel):
    refresh_token: str
