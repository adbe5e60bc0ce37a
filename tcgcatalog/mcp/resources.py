"""
MCP resource definitions for the catalog.

Resource URIs address the same six read operations as the tools:

    pokemontcg://sets                   pokemontcg://cards
    pokemontcg://sets/id/{setId}        pokemontcg://cards/id/{cardId}
    pokemontcg://sets/code/{ptcgoCode}  pokemontcg://cards/set/{setId}

The authority names the entity kind, the path the sub-operation and key.
Only the query parameters each operation accepts are forwarded.
"""

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, unquote, urlsplit

from tcgcatalog.config import settings
from tcgcatalog.services.catalog_client import CatalogClient, key_path

PAGING_PARAMS = ("limit", "offset")


@dataclass(frozen=True)
class ResourceTemplate:
    """A resource URI template and the query parameters it forwards."""

    kind: str
    operation: str | None
    key_name: str | None
    name: str
    description: str
    allowed_params: tuple[str, ...] = ()

    def uri_template(self, scheme: str) -> str:
        uri = f"{scheme}://{self.kind}"
        if self.operation:
            uri += f"/{self.operation}/{{{self.key_name}}}"
        return uri


RESOURCE_TEMPLATES: list[ResourceTemplate] = [
    ResourceTemplate(
        kind="sets",
        operation=None,
        key_name=None,
        name="sets",
        description="Paginated list of all sets, newest first",
        allowed_params=PAGING_PARAMS,
    ),
    ResourceTemplate(
        kind="sets",
        operation="id",
        key_name="setId",
        name="set_by_id",
        description="A set by its setId",
    ),
    ResourceTemplate(
        kind="sets",
        operation="code",
        key_name="ptcgoCode",
        name="set_by_code",
        description="A set by its PTCGO code",
    ),
    ResourceTemplate(
        kind="cards",
        operation=None,
        key_name=None,
        name="cards",
        description="Paginated list of cards, optionally filtered by searchName",
        allowed_params=(*PAGING_PARAMS, "searchName"),
    ),
    ResourceTemplate(
        kind="cards",
        operation="id",
        key_name="cardId",
        name="card_by_id",
        description="A card by its cardId",
    ),
    ResourceTemplate(
        kind="cards",
        operation="set",
        key_name="setId",
        name="cards_by_set",
        description="Paginated list of the cards in a set",
        allowed_params=PAGING_PARAMS,
    ),
]

_TEMPLATES_BY_ROUTE = {(t.kind, t.operation): t for t in RESOURCE_TEMPLATES}


@dataclass(frozen=True)
class ResolvedResource:
    """A resource URI translated into a catalog API request."""

    template: ResourceTemplate
    path: str
    params: dict[str, str]


def resolve_resource_uri(uri: str, scheme: str | None = None) -> ResolvedResource:
    """
    Translate a resource URI into an API path and forwarded query params.

    Raises:
        LookupError: If the URI does not match any resource template
    """
    scheme = scheme or settings.resource_scheme
    parts = urlsplit(str(uri))
    if parts.scheme != scheme:
        raise LookupError(f"Unknown resource: {uri}")

    segments = [unquote(s) for s in parts.path.split("/") if s]
    if not segments:
        operation, key = None, None
    elif len(segments) == 2:
        operation, key = segments
    else:
        raise LookupError(f"Unknown resource: {uri}")

    template = _TEMPLATES_BY_ROUTE.get((parts.netloc, operation))
    if template is None:
        raise LookupError(f"Unknown resource: {uri}")

    path = key_path(template.kind, operation, key) if operation and key else f"/{template.kind}"
    params = {
        name: value
        for name, value in parse_qsl(parts.query)
        if name in template.allowed_params
    }
    return ResolvedResource(template=template, path=path, params=params)


async def read_resource(client: CatalogClient, uri: str, scheme: str | None = None) -> str:
    """
    Read a catalog resource as pretty-printed JSON text.

    Lookup and API errors propagate to the caller.
    """
    resolved = resolve_resource_uri(uri, scheme)
    data: Any = await client.get_json(resolved.path, resolved.params)
    return json.dumps(data, indent=2, ensure_ascii=False)
