"""
Operation rewriting for WIT function signatures.
"""

from typing import Iterable, List, Optional

from ...logging_config import get_logger
from ..core.model import CodegenOperation
from ..core.naming import NameSanitizer
from .errors import ErrorModel
from .types import VOID_TYPE

logger = get_logger(__name__)

RESPONSE_SUFFIX = "Response"


class OperationRewriter:
    """Rewrites operations into WIT-shaped signatures.

    Parameter names are sanitized in place and every operation gets an
    ``x-wit-return`` vendor extension wrapping its return type in the
    shared error model.
    """

    def __init__(self, error_model: ErrorModel, sanitizer: NameSanitizer):
        self.error_model = error_model
        self.sanitizer = sanitizer

    def post_process_operations(
        self, operations: Iterable[CodegenOperation]
    ) -> List[CodegenOperation]:
        """Rewrite every operation and return them in their original order."""
        processed = []
        for operation in operations:
            self.process_operation(operation)
            processed.append(operation)
        return processed

    def process_operation(self, operation: CodegenOperation) -> CodegenOperation:
        for param in operation.all_params:
            param.param_name = self.sanitizer.sanitize_name(param.param_name)
            if param.is_enum:
                param.data_type = self.sanitizer.to_type_name(param.data_type)

        return_type = self.determine_return_type(operation.return_type)
        operation.vendor_extensions["x-wit-return"] = self.error_model.result_type(
            return_type
        )
        logger.debug(
            "Operation %s returns %s",
            operation.operation_id,
            operation.vendor_extensions["x-wit-return"],
        )
        return operation

    def determine_return_type(self, return_type: Optional[str]) -> str:
        """
        Compute the success type of an operation.

        ``FooResponse`` envelopes are unwrapped to ``Foo``; a missing return
        type becomes ``void``.
        """
        if return_type is None or return_type == VOID_TYPE:
            return VOID_TYPE

        if return_type.endswith(RESPONSE_SUFFIX):
            inner_type = return_type[: -len(RESPONSE_SUFFIX)]
            return self.sanitizer.to_type_name(inner_type)

        return return_type
