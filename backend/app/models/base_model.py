from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from typing import Optional

from app.core.errors import ValidationError


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (osmId, isFavorited, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Domain Models ---
class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @classmethod
    def parse(cls, raw: str, field: str) -> "Coordinate":
        """Parse "lat,lon"; raises ValidationError naming `field`."""
        parts = [p.strip() for p in raw.split(",")]
        if len(parts) != 2:
            raise ValidationError(field, f"{field} must be 'lat,lon'")
        try:
            return cls(lat=parts[0], lon=parts[1])
        except PydanticValidationError as e:
            raise ValidationError(field, f"{field}: {e.errors()[0]['msg']}")


# --- API Request/Response Models ---
class ErrorResponse(BaseModel):
    message: str
    field: Optional[str] = None

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64, description="Display name to sign in as")

class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str

class UserInfo(CamelModel):
    user_id: str
