import uuid

from app.schemas.platform import PlatformOut, Pricing


def make_platform(name="Tool", description="", tags=(), features=(), has_free=False, api=False) -> PlatformOut:
    """An in-memory platform for the pure search tests."""
    return PlatformOut(
        id=uuid.uuid4(),
        name=name,
        description=description,
        logo=None,
        url="https://example.com",
        tags=list(tags),
        features=list(features),
        pricing=Pricing(has_free=has_free),
        api_available=api,
        rating=0.0,
        review_count=0,
        approved=True,
        created_at=None,
    )
