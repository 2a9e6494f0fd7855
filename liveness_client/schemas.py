from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _ResponseModel(BaseModel):
    # wire names are PascalCase, attributes are snake_case; values of the
    # wrong JSON type are rejected rather than coerced
    model_config = ConfigDict(populate_by_name=True, strict=True)


class ErrorEntry(_ResponseModel):
    code: str = Field("", alias="Code")
    message: str = Field("", alias="Message")
    details: str = Field("", alias="Details")


class EyeCenters(_ResponseModel):
    right_eye_x: float = Field(0.0, alias="RightEyeX")
    right_eye_y: float = Field(0.0, alias="RightEyeY")
    left_eye_x: float = Field(0.0, alias="LeftEyeX")
    left_eye_y: float = Field(0.0, alias="LeftEyeY")


class Sample(_ResponseModel):
    errors: List[ErrorEntry] = Field(default_factory=list, alias="Errors")
    eye_centers: EyeCenters = Field(default_factory=EyeCenters, alias="EyeCenters")


class LivenessResult(_ResponseModel):
    success: bool = Field(False, alias="Success")
    state: str = Field("", alias="State")
    job_id: str = Field("", alias="JobID")
    samples: List[Sample] = Field(default_factory=list, alias="Samples")
