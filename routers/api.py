import json
import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.responses import bad_request, not_found, ok

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["api"])
health_router = APIRouter(tags=["health"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# Mock product data
PRODUCTS = {
    "1": {"id": 1, "name": "Widget A", "price": 29.99, "description": "A great widget"},
    "2": {"id": 2, "name": "Widget B", "price": 39.99, "description": "An even better widget"},
    "3": {"id": 3, "name": "Widget C", "price": 49.99, "description": "The best widget"},
}


class ContactForm(BaseModel):
    name: str = ""
    email: str = ""
    message: str = ""


async def bind_contact_form(request: Request) -> ContactForm:
    """JSON или форма (hx-post отправляет urlencoded)."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            payload = {key: form.get(key) for key in ContactForm.model_fields if key in form}
        else:
            payload = json.loads(await request.body())
        if not isinstance(payload, dict):
            raise bad_request("Invalid form data")
        return ContactForm.model_validate(payload)
    except (ValueError, RecursionError, ValidationError, StarletteHTTPException) as e:
        logger.info(f"Rejected contact form: {e}")
        raise bad_request("Invalid form data")


@router.post("/contact")
async def submit_contact(request: Request):
    form = await bind_contact_form(request)

    # Здесь могла бы быть отправка письма или запись в базу
    logger.info(f"Contact form submitted: {form.model_dump()}")

    return ok(
        {
            "success": True,
            "message": "Thank you for your message! We'll get back to you soon.",
        }
    )


@router.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if product is None:
        raise not_found("Product not found")
    return ok(product)


@router.get("/info")
def info(request: Request):
    config = request.app.state.config
    return ok(
        {
            "app": config.title,
            "version": config.version,
            "htmx_mounts": [
                {
                    "path": mount["path"],
                    "description": mount.get("description", ""),
                    "sources": describe_sources(mount.get("sources", [])),
                }
                for mount in config.htmx_mounts
            ],
        }
    )


def describe_sources(sources):
    described = []
    for position, source in enumerate(sources):
        label = str(source)
        if label.startswith("@"):
            label = f"{label[1:]} assets"
        if position == 0 and len(sources) > 1:
            label += " (highest priority)"
        elif position == len(sources) - 1 and len(sources) > 1:
            label += " (lowest priority)"
        described.append(label)
    return described


@health_router.api_route("/health", methods=["GET", "HEAD"])
def health():
    return ok("OK")
