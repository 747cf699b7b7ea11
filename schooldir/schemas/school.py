from pydantic import BaseModel, Field, field_validator


class SchoolCreate(BaseModel):
    name: str
    address: str
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)

    @field_validator("name", "address")
    @classmethod
    def not_blank(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return value

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def not_bool(cls, value, info):
        # JSON true/false иначе превращаются в 1.0/0.0
        if isinstance(value, bool):
            raise ValueError(f"Invalid {info.field_name}")
        return value


class SchoolCreated(BaseModel):
    message: str
    schoolId: int


class SchoolDistanceOut(BaseModel):
    id: int
    name: str
    address: str
    distance_m: float

    class Config:
        from_attributes = True
