from .context import (
    TEST_CONTEXT,
    TestContext,
    get_test_context,
    test_context_scope,
)
from .output_capture import (
    OutputBuffer,
    OutputCapture,
    captured_output,
    get_current_capture,
    output_capture,
)

__all__ = [
    "TestContext",
    "TEST_CONTEXT",
    "get_test_context",
    "test_context_scope",
    "OutputBuffer",
    "OutputCapture",
    "get_current_capture",
    "output_capture",
    "captured_output",
]
