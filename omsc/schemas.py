"""Pydantic schemas for JSON configuration validation."""

from pydantic import BaseModel, Field, RootModel, field_validator

from .constants import (
    BASE_URL,
    COUNTRY_PAGES,
    ESTABLISHED_THRESHOLD,
    MEMBER_PAGES,
    OUTPUT_DIR,
    VETERAN_THRESHOLD,
)


class ReportConfig(BaseModel):
    """Report generation settings."""

    base_url: str = Field(default=BASE_URL, pattern=r'^https?://')
    country_pages: list[str] = Field(default_factory=lambda: list(COUNTRY_PAGES))
    member_pages: list[str] = Field(default_factory=lambda: list(MEMBER_PAGES))
    output_dir: str = Field(default=OUTPUT_DIR, min_length=1)
    fetch_workers: int = Field(default=4, ge=1, le=16)
    request_timeout: float = Field(default=30.0, gt=0)
    min_participations: int = Field(default=1, ge=1)
    veteran_threshold: int = Field(default=VETERAN_THRESHOLD, ge=1)
    established_threshold: int = Field(default=ESTABLISHED_THRESHOLD, ge=1)
    participation_sort: str = Field(default='missed', pattern=r'^(missed|alphabetical)$')
    cap_participation_at_reference: bool = True
    show_qualification_rate: bool = False
    log_dir: str = Field(default='logs', min_length=1)
    log_level: str = Field(default='INFO', pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')

    @field_validator('country_pages', 'member_pages')
    @classmethod
    def validate_pages(cls, v):
        """Ensure page identifiers are non-empty wiki titles."""
        if not v:
            raise ValueError('At least one page is required')
        for page in v:
            if not page or page.strip() != page or ' ' in page:
                raise ValueError(f'Invalid wiki page identifier: {page!r}')
        return v

    class Config:
        extra = 'forbid'


class FlagOverrides(RootModel[dict[str, str]]):
    """Complete flag_overrides.json file structure (name -> flag glyph)."""

    @field_validator('root')
    @classmethod
    def validate_glyphs(cls, v):
        """Ensure no override maps to an empty glyph."""
        for name, glyph in v.items():
            if not glyph.strip():
                raise ValueError(f'Empty flag override for: {name}')
        return v
