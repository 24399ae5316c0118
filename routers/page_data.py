from datetime import datetime

from fastapi import Request

from core.htmx import PageData, PageDataRegistry

# Данные для HTMX страниц, отдаются по /page-data/*
registry = PageDataRegistry()
router = registry.router


@registry.page("/")
def home(request: Request) -> PageData:
    return PageData(
        title="Home Page",
        data={
            "message": "Welcome to Lokstra HTMX Demo",
            "timestamp": datetime.now(),
            "features": [
                "HTMX page serving with layouts",
                "Static asset fallback",
                "Partial rendering support",
                "Template-based rendering",
            ],
        },
    )


@registry.page("/about")
def about(request: Request) -> PageData:
    return PageData(
        title="About Us",
        description="This is the about page with dynamic content",
        data={
            "team": [
                {"name": "Alice", "role": "Developer"},
                {"name": "Bob", "role": "Designer"},
                {"name": "Charlie", "role": "Product Manager"},
            ],
        },
    )


@registry.page("/products")
def products(request: Request) -> PageData:
    return PageData(
        title="Our Products",
        data={
            "products": [
                {"id": 1, "name": "Widget A", "price": 29.99},
                {"id": 2, "name": "Widget B", "price": 39.99},
                {"id": 3, "name": "Widget C", "price": 49.99},
            ],
        },
    )


@registry.page("/contact")
def contact(request: Request) -> PageData:
    return PageData(
        title="Contact Us",
        data={
            "email": "contact@example.com",
            "phone": "+1-555-0123",
            "address": "123 Main St, City, State 12345",
        },
    )


@registry.page("/admin/")
def admin_dashboard(request: Request) -> PageData:
    return PageData(title="Admin Dashboard")
