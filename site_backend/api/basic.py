# site_backend/api/basic.py

import json
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from site_backend.api.auth import require_write_access
from site_backend.config import Settings, get_app_settings
from site_backend.core.errors import NotFoundError, storage_errors
from site_backend.core.storage import save_upload
from site_backend.database import get_db
from site_backend.models.basic import Basic as BasicModel


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/basic")


# -------------------------------
# Schemas
# -------------------------------

class Basic(BaseModel):
    """
    Public shape of a site configuration record (camelCase keys).
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    logo_path: str | None = Field(None, serialization_alias="logoPath")
    hero_image_path: str | None = Field(None, serialization_alias="heroImagePath")
    navbar_items: list[str] = Field(default_factory=list, serialization_alias="navbarItems")
    counter_title1: str | None = Field(None, serialization_alias="counterTitle1")
    counter_value1: str | None = Field(None, serialization_alias="counterValue1")
    counter_title2: str | None = Field(None, serialization_alias="counterTitle2")
    counter_value2: str | None = Field(None, serialization_alias="counterValue2")
    counter_title3: str | None = Field(None, serialization_alias="counterTitle3")
    counter_value3: str | None = Field(None, serialization_alias="counterValue3")
    counter_title4: str | None = Field(None, serialization_alias="counterTitle4")
    counter_value4: str | None = Field(None, serialization_alias="counterValue4")
    headline: str | None = None
    description: str | None = None


class BasicForm:
    """
    Multipart text fields shared by create and update.
    navbarItems stays raw here; it is parsed inside the route.
    logo and heroImage only take file parts; a text value there is a 400.
    """

    def __init__(
        self,
        navbar_items: str | None = Form(None, alias="navbarItems"),
        counter_title1: str | None = Form(None, alias="counterTitle1"),
        counter_value1: str | None = Form(None, alias="counterValue1"),
        counter_title2: str | None = Form(None, alias="counterTitle2"),
        counter_value2: str | None = Form(None, alias="counterValue2"),
        counter_title3: str | None = Form(None, alias="counterTitle3"),
        counter_value3: str | None = Form(None, alias="counterValue3"),
        counter_title4: str | None = Form(None, alias="counterTitle4"),
        counter_value4: str | None = Form(None, alias="counterValue4"),
        headline: str | None = Form(None),
        description: str | None = Form(None),
        logo: UploadFile | None = File(None),
        hero_image: UploadFile | None = File(None, alias="heroImage"),
    ):
        self.navbar_items = navbar_items
        self.text_fields = {
            "counter_title1": counter_title1,
            "counter_value1": counter_value1,
            "counter_title2": counter_title2,
            "counter_value2": counter_value2,
            "counter_title3": counter_title3,
            "counter_value3": counter_value3,
            "counter_title4": counter_title4,
            "counter_value4": counter_value4,
            "headline": headline,
            "description": description,
        }
        self.logo = logo
        self.hero_image = hero_image


def parse_navbar_items(raw: str | None) -> list[str]:
    """
    navbarItems arrives as a JSON-encoded array of strings.
    A missing value means an empty navbar, which fits the full-replace update
    rather than failing the request like a malformed value does.
    Anything else malformed raises ValueError.
    """
    if raw is None:
        return []
    items = json.loads(raw)
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise ValueError("navbarItems must be a JSON array of strings")
    return items


def _has_file(upload: UploadFile | None) -> bool:
    return upload is not None and bool(upload.filename)


def apply_form(record: BasicModel, form: BasicForm, navbar_items: list[str], settings: Settings):
    """
    Full replace: every field is overwritten, and an image part that was not
    submitted clears the stored path.
    """
    record.logo_path = save_upload(form.logo, settings.upload_dir) if _has_file(form.logo) else None
    record.hero_image_path = (
        save_upload(form.hero_image, settings.upload_dir) if _has_file(form.hero_image) else None
    )
    record.navbar_items = navbar_items
    for name, value in form.text_fields.items():
        setattr(record, name, value)


# -------------------------------
# Endpoints
# -------------------------------

@router.get("", response_model=list[Basic])
def list_basics(db: Session = Depends(get_db)):
    with storage_errors("Error fetching basic data"):
        return db.query(BasicModel).all()


@router.post(
    "",
    response_model=Basic,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_write_access)],
)
def create_basic(
    form: BasicForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    with storage_errors("Error creating basic data"):
        navbar_items = parse_navbar_items(form.navbar_items)
        basic = BasicModel()
        apply_form(basic, form, navbar_items, settings)
        db.add(basic)
        db.commit()
        db.refresh(basic)

    logger.info("Created basic data %s", basic.id)
    return basic


@router.get("/{basic_id}", response_model=Basic)
def get_basic(basic_id: str, db: Session = Depends(get_db)):
    with storage_errors("Error fetching basic data"):
        basic = db.get(BasicModel, basic_id)
        if not basic:
            raise NotFoundError("Basic data not found")
        return basic


@router.put("/{basic_id}", response_model=Basic, dependencies=[Depends(require_write_access)])
def update_basic(
    basic_id: str,
    form: BasicForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    with storage_errors("Error updating basic data"):
        navbar_items = parse_navbar_items(form.navbar_items)

        basic = db.get(BasicModel, basic_id)
        if not basic:
            raise NotFoundError("Basic data not found")

        # files go to disk before the row is committed; a failed commit leaves them orphaned
        apply_form(basic, form, navbar_items, settings)
        db.commit()
        db.refresh(basic)

    logger.info("Updated basic data %s", basic_id)
    return basic


@router.delete("/{basic_id}", dependencies=[Depends(require_write_access)])
def delete_basic(basic_id: str, db: Session = Depends(get_db)):
    with storage_errors("Error deleting basic data"):
        basic = db.get(BasicModel, basic_id)
        if not basic:
            raise NotFoundError("Basic data not found")
        db.delete(basic)
        db.commit()

    logger.info("Deleted basic data %s", basic_id)
    return {"message": "Basic data deleted successfully"}
