"""API request/response schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Populated references
class CompanyBrief(CamelModel):
    id: str
    company_name: str
    logo: str | None


class CompanyDetail(CompanyBrief):
    description: str


class ProfessionRef(CamelModel):
    id: str
    name: str
    category: str


class PlaceRef(CamelModel):
    id: str
    name: str


# Job schemas
class ApplicationResponse(CamelModel):
    id: str
    professional_id: str | None = Field(serialization_alias="professional")
    trainee_id: str | None = Field(serialization_alias="trainee")
    notes: str
    status: str
    applied_at: datetime


class JobBase(CamelModel):
    id: str
    title: str
    description: str
    requirements: str
    salary: str | None
    job_type: str
    status: str
    profession_name: str
    posted_date: datetime
    views: int
    applications_count: int


class JobListItem(JobBase):
    company: CompanyBrief | None
    profession: ProfessionRef | None
    city: PlaceRef | None
    country: PlaceRef | None
    province_id: str | None = Field(serialization_alias="province")


class JobDetail(JobBase):
    company: CompanyDetail | None
    profession: ProfessionRef | None
    city: PlaceRef | None
    country: PlaceRef | None
    province: PlaceRef | None
    applications: list[ApplicationResponse] = []


class JobCreate(CamelModel):
    """Job payload. Ownership, snapshot and counter fields are not accepted."""

    profession: str
    title: str = ""
    description: str = ""
    requirements: str = ""
    salary: str | None = None
    job_type: str = "full-time"
    status: str = "active"
    city: str | None = None
    country: str | None = None
    province: str | None = None

    class Config:
        extra = "ignore"
        coerce_numbers_to_str = True

    @field_validator("title", "description", "requirements", "job_type", "status", mode="before")
    @classmethod
    def null_means_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def job_fields(self) -> dict:
        """Columns copied verbatim onto the new job."""
        return {
            "title": self.title,
            "description": self.description,
            "requirements": self.requirements,
            "salary": self.salary,
            "job_type": self.job_type,
            "status": self.status,
            "city_id": self.city,
            "country_id": self.country,
            "province_id": self.province,
        }


class ApplyRequest(CamelModel):
    job_id: str
    professional_id: str | None = None
    trainee_id: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def exactly_one_applicant(self):
        if bool(self.professional_id) == bool(self.trainee_id):
            raise ValueError("Provide exactly one of professionalId or traineeId")
        return self


# CV / upload schemas
class CVMetadata(CamelModel):
    cv_path: str
    file_name: str


class UploadedCV(CVMetadata):
    content_type: str
    size: int


class LogoResponse(CamelModel):
    company_id: str
    logo: str
    content_type: str
    size: int
