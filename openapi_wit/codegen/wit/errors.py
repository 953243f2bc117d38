"""
Error model shared by every generated operation.

Each function returns ``expected<T, error>``; the ``error`` variant is
synthesized once when a generator is configured.
"""

from dataclasses import dataclass

from ...logging_config import get_logger

logger = get_logger(__name__)


ERROR_TYPE_NAME = "error"

_VARIANT_ERROR_MODEL = (
    "variant error {\n"
    "    validation-error(record {\n"
    "        message: string,\n"
    "        details: list<record {\n"
    "            field: string,\n"
    "            message: string,\n"
    "        }>,\n"
    "    }),\n"
    "    unauthorized(string),\n"
    "    forbidden(string),\n"
    "    not-found(string),\n"
    "    rate-limit-exceeded(string),\n"
    "    internal-error(string),\n"
    "}"
)


@dataclass(frozen=True)
class ErrorModel:
    """The failure arm of every operation result."""

    name: str
    declaration: str
    style: str = "variant"

    def result_type(self, success_type: str) -> str:
        """Wrap a success type into the fallible result shape."""
        return f"expected<{success_type}, {self.name}>"


def generate_error_model(style: str = "variant") -> ErrorModel:
    """
    Synthesize the error model.

    Only the variant style has a declaration; other styles fall back to it.
    """
    if style != "variant":
        logger.warning(
            "Error model style '%s' is not supported, using variant", style
        )
    return ErrorModel(name=ERROR_TYPE_NAME, declaration=_VARIANT_ERROR_MODEL)
