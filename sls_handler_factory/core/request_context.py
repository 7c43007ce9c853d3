"""
RequestContext management.
Use ContextVar to share the current invocation identity across async execution.
"""

from contextvars import ContextVar
from typing import Optional

# Lambda request ID of the invocation being handled.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
# Name of the function being invoked.
_function_name_var: ContextVar[Optional[str]] = ContextVar("function_name", default=None)


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def get_function_name() -> Optional[str]:
    """Get the current function name."""
    return _function_name_var.get()


def set_invocation(request_id: Optional[str], function_name: Optional[str] = None) -> None:
    """
    Bind the identity of the current invocation.

    Args:
        request_id: aws_request_id of the Lambda context
        function_name: function_name of the Lambda context
    """
    _request_id_var.set(request_id)
    _function_name_var.set(function_name)


def clear_invocation() -> None:
    """Clear the invocation context."""
    _request_id_var.set(None)
    _function_name_var.set(None)
