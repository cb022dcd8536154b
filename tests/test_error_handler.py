from storefront.error_handler import ErrorHandler
from storefront.errors import NetworkFailure, ServerError
from storefront.integrations.response_wrappers import IntegrationResponseError


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["error_type"] == "unexpected"
    assert "went wrong" in out["message"].lower()
    assert "boom" in out["metadata"]["error"]
    assert out["metadata"]["context"] == {"k": "v"}


def test_storefront_errors_keep_their_message():
    eh = ErrorHandler()
    out = eh.handle_exception(ServerError("out of stock", status_code=409), fallback="Order failed")
    assert out["message"] == "out of stock"
    assert out["error_type"] == "server_error"


def test_malformed_response_uses_fallback():
    eh = ErrorHandler()
    out = eh.handle_exception(IntegrationResponseError("missing sku"), fallback="Search failed")
    assert out["message"] == "Search failed"
    assert out["error_type"] == "invalid_response"


def test_always_fallback_hides_reason():
    eh = ErrorHandler()
    out = eh.handle_exception(NetworkFailure("refused"), fallback="Seed failed", always_fallback=True)
    assert out["message"] == "Seed failed"
    assert out["error_type"] == "network_failure"
