"""Upload endpoints for CVs and company logos."""

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from jobpool.api.auth import get_current_user
from jobpool.api.responses import dump, envelope
from jobpool.api.schemas import LogoResponse, UploadedCV
from jobpool.db import Company, Professional, Trainee, User, get_db
from jobpool.errors import BadRequestError, ForbiddenError, NotFoundError
from jobpool.uploads import get_storage, receive_upload

router = APIRouter()


@router.post("/cv")
async def upload_cv(
    cv: UploadFile = File(...),
    professional_id: str | None = Query(None, alias="professionalId"),
    trainee_id: str | None = Query(None, alias="traineeId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
):
    """Upload a CV (PDF/DOC/DOCX or image) for the caller's professional or trainee profile."""
    if professional_id:
        record = db.query(Professional).filter(Professional.id == professional_id).first()
        label = "Professional"
    elif trainee_id:
        record = db.query(Trainee).filter(Trainee.id == trainee_id).first()
        label = "Trainee"
    else:
        raise BadRequestError("professionalId or traineeId is required")

    if not record:
        raise NotFoundError(f"{label} not found")
    if record.user_id != user.id:
        raise ForbiddenError("Not authorized to update this profile")

    stored = await receive_upload(cv, "cv", storage)

    record.cv = stored.path
    if isinstance(record, Professional):
        record.cv_file_name = stored.original_name
        file_name = stored.original_name
    else:
        file_name = "trainee-cv.pdf"
    db.commit()

    return envelope(
        data=dump(
            UploadedCV,
            {
                "cv_path": stored.path,
                "file_name": file_name,
                "content_type": stored.content_type,
                "size": stored.size,
            },
        ),
        message="CV uploaded successfully",
    )


@router.post("/logo")
async def upload_logo(
    logo: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
):
    """Upload the logo of the caller's company."""
    company = db.query(Company).filter(Company.user_id == user.id).first()
    if not company:
        raise NotFoundError("Company profile not found. Please create company profile first.")

    stored = await receive_upload(logo, "logo", storage)
    company.logo = stored.path
    db.commit()

    return envelope(
        data=dump(
            LogoResponse,
            {"company_id": company.id, "logo": stored.path, "content_type": stored.content_type, "size": stored.size},
        ),
        message="Logo uploaded successfully",
    )
