from pydantic import BaseModel, Field, ValidationError


class MatcherSettings(BaseModel):
    match_threshold: float = Field(default=70.0, ge=0.0, le=100.0)
    default_muscle_group: str = "other"
    default_equipment: str = "other"
    default_reps: int = Field(default=10, ge=1)
    log_level: str = "INFO"


def validate_settings(data: dict) -> MatcherSettings:
    try:
        return MatcherSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
