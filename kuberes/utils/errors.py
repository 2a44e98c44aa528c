import json
from kubernetes_asyncio.client import ApiException


class KubeConfigError(Exception):
    """Kubernetes client configuration could not be loaded."""
    pass


def describe_api_exception(ex: ApiException) -> str:
    """
    Build a readable message out of a kubernetes ApiException.

    The response body is parsed for the API server's status message when
    present, e.g. "Kubernetes API error (403): Forbidden - pods is forbidden".
    """
    error_msg = f"Kubernetes API error ({ex.status}): {ex.reason}"

    try:
        if ex.body:
            body = json.loads(ex.body)
            if "message" in body:
                error_msg = f"{error_msg} - {body['message']}"
    except (json.JSONDecodeError, TypeError, AttributeError):
        pass

    return error_msg
