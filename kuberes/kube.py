"""Kubernetes API access for the exporter.

The client is built once at startup, either from the ambient in-cluster
service account or from a named context of the local kubeconfig. Credential
resolution is left entirely to kubernetes_asyncio.
"""

import logging
from typing import Optional

from kubernetes_asyncio import config
from kubernetes_asyncio.client import ApiClient, ApiException, Configuration, CoreV1Api

from kuberes.types.models import PodList
from kuberes.types.schemas import PodListSchema
from kuberes.utils.errors import KubeConfigError

logger = logging.getLogger(__name__)


class KubeClient:
    """Thin wrapper over CoreV1Api exposing the single call the exporter needs."""

    _pod_list_schema = PodListSchema()

    def __init__(
        self, api_client: ApiClient, request_timeout: Optional[float] = None
    ) -> None:
        self.api_client = api_client
        self.core_v1 = CoreV1Api(api_client)
        self.request_timeout = request_timeout

    async def list_pods(self) -> PodList:
        """List pods across all namespaces.

        The raw JSON is loaded through PodListSchema instead of the generated
        V1Pod models so that only the fields read by the exporter are built.

        Raises:
            ApiException: the API server answered with a non-2xx status
            aiohttp.ClientError: the request failed on the wire
            marshmallow.ValidationError: the payload is not a pod list
        """
        response = await self.core_v1.list_pod_for_all_namespaces(
            _preload_content=False,
            _request_timeout=self.request_timeout,
        )
        try:
            if not 200 <= response.status <= 299:
                ex = ApiException(status=response.status, reason=response.reason)
                ex.body = await response.text()
                raise ex
            data = await response.json()
        finally:
            response.release()
        return self._pod_list_schema.load(data)

    async def close(self) -> None:
        await self.api_client.close()


async def new_kube_client(
    kube_context: str, request_timeout: Optional[float] = None
) -> KubeClient:
    """Build an authenticated client.

    Args:
        kube_context: kubeconfig context name, empty to use in-cluster credentials
        request_timeout: timeout in seconds applied to every list call

    Raises:
        KubeConfigError: if no usable configuration could be loaded
    """
    configuration = Configuration()
    try:
        if not kube_context:
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration")
        else:
            await config.load_kube_config(
                context=kube_context, client_configuration=configuration
            )
            logger.info(f"Loaded Kubernetes configuration for context '{kube_context}'")
    except (config.ConfigException, OSError) as e:
        source = f"context '{kube_context}'" if kube_context else "in-cluster credentials"
        raise KubeConfigError(
            f"Failed to load Kubernetes configuration from {source}: {e}"
        ) from e

    return KubeClient(ApiClient(configuration=configuration), request_timeout)
