"""Runtime configuration for schema bootstrap and execution."""

from pydantic_settings import BaseSettings, SettingsConfigDict

FIELD_VISIBILITY_DEFAULT = "default"
FIELD_VISIBILITY_NO_INTROSPECTION = "no-introspection"

ENV_PREFIX = "GQL_BOOTSTRAP_"


class Config(BaseSettings):
    """Settings consumed while compiling and executing a schema.

    Values not passed explicitly are read from GQL_BOOTSTRAP_* environment
    variables, e.g. GQL_BOOTSTRAP_FIELD_VISIBILITY=no-introspection.

    Attributes:
        field_visibility: None, empty or "default" for full introspection,
            "no-introspection" to disable it, or comma separated regex
            patterns of fields to hide from introspection.
        print_data_fetcher_exception: Log exceptions raised by business
            methods with their traceback before they reach the engine.
        batch_max_size: Upper bound on keys per batch loader call.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
    )

    field_visibility: str | None = None
    print_data_fetcher_exception: bool = False
    batch_max_size: int | None = None
