"""Application configuration.

Loads settings from environment variables with sensible defaults and
derives the explicit ``ProductListConfiguration`` handed to the model.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ListTemplate(BaseModel):
    """Predefined product list declared in configuration.

    Accepts both the camelCase keys used by storefront configuration
    files (``templateId``, ``scopeId``...) and snake_case names. Numeric
    template and type ids are read as strings.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

    template_id: str | None = Field(default=None, alias="templateId")
    name: str | None = None
    description: str | None = None
    scope_id: str | int | None = Field(default=None, alias="scopeId")
    scope_name: str | None = Field(default=None, alias="scopeName")
    type_id: str | None = Field(default=None, alias="typeId")
    type_name: str | None = Field(default=None, alias="typeName")


DEFAULT_LIST_TEMPLATES: list[ListTemplate] = [
    ListTemplate(
        template_id="1",
        name="Saved For Later",
        description="",
        scope_id="2",
        scope_name="private",
        type_id="2",
        type_name="later",
    ),
    ListTemplate(
        template_id="2",
        name="Request a Quote",
        description="",
        scope_id="2",
        scope_name="private",
        type_id="4",
        type_name="quote",
    ),
]


class ProductListConfiguration(BaseModel):
    """Configuration injected into the product list model."""

    login_required: bool = True
    addition_enabled: bool = True
    list_templates: list[ListTemplate] = Field(
        default_factory=lambda: list(DEFAULT_LIST_TEMPLATES)
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./productlists.db"

    # Product lists
    login_required: bool = True
    addition_enabled: bool = True
    list_templates: list[ListTemplate] = Field(
        default_factory=lambda: list(DEFAULT_LIST_TEMPLATES)
    )
    date_format: str = "%m/%d/%Y"
    item_page_size: int = 20

    # Export
    export_enabled: bool = False
    export_directory: str = "./exports"
    export_file_name: str = "ProductLists.xls"
    export_recipient: str = "wishlists@example.com"
    export_sender: str = "no-reply@example.com"
    export_subject: str = "Wishlist export"
    export_attachment_file_id: str | None = None

    # SMTP
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = False
    smtp_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PRODUCTLISTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def product_list_configuration(self) -> ProductListConfiguration:
        """Build the configuration value handed to the product list model.

        Returns:
            Product list configuration.
        """
        return ProductListConfiguration(
            login_required=self.login_required,
            addition_enabled=self.addition_enabled,
            list_templates=list(self.list_templates),
        )


settings = Settings()
