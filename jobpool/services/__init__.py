"""Business logic over the entity store."""

from jobpool.services.jobs import Applicant, CVInfo, JobFilters, JobService

__all__ = ["Applicant", "CVInfo", "JobFilters", "JobService"]
