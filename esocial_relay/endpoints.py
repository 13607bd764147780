"""Fixed eSocial endpoint table and lookup."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .exceptions import UnknownEnvironment
from .models import Action, EndpointConfig, Environment

QUERY_PATH = "/servicos/empregador/consultarloteeventos/WsConsultarLoteEventos.svc"
DOWNLOAD_PATH = "/servicos/empregador/download/WsDownload.svc"

ENDPOINTS: Mapping[Environment, EndpointConfig] = MappingProxyType({
    Environment.PRODUCTION: EndpointConfig(
        hostname="webservices.esocial.gov.br",
        query_path=QUERY_PATH,
        download_path=DOWNLOAD_PATH,
    ),
    Environment.PRODUCTION_RESTRICTED: EndpointConfig(
        hostname="webservices.producaorestrita.esocial.gov.br",
        query_path=QUERY_PATH,
        download_path=DOWNLOAD_PATH,
    ),
})


def resolve_endpoint(environment, action: Action) -> tuple[str, str]:
    """
    Map (environment, action) to (hostname, path).

    Accepts an Environment or its wire value and fails closed on anything
    outside the table.
    """
    try:
        config = ENDPOINTS[Environment(environment)]
    except (ValueError, KeyError):
        raise UnknownEnvironment(f"Ambiente desconhecido: {environment}")

    path = config.query_path if action == Action.QUERY else config.download_path
    return config.hostname, path
