# routescope/routes/document_routes.py
"""
HTTP boundary used by an out-of-process editor integration.

The editor posts the current text of an open document; the response carries
the discovered routes, or the code-lens / tree-view shapes built from them.
Document identities are editor URIs (`file:///.../server.js`), so they are
taken as the trailing path segment.
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from routescope.core import RouteScopeCore
from routescope.models.route_model import routes_to_dicts
from routescope.providers.route_views import build_code_lenses, build_tree_items
from routescope.utils.response_builder import success_response

router = APIRouter(tags=["documents"])


class DocumentBody(BaseModel):
    language_id: str
    text: str


def get_core(request: Request) -> RouteScopeCore:
    return request.app.state.core


@router.post("/documents/routes/{identity:path}")
async def document_routes(identity: str, body: DocumentBody, core: RouteScopeCore = Depends(get_core)):
    """
    Return the routes declared in the posted document text.
    """
    routes = await core.routes_for(identity, body.language_id, body.text)
    return success_response(
        data={"language_id": body.language_id, "routes": routes_to_dicts(routes)},
        message=f"{len(routes)} route(s) found",
        identity=identity,
    )


@router.post("/documents/lenses/{identity:path}")
async def document_lenses(identity: str, body: DocumentBody, core: RouteScopeCore = Depends(get_core)):
    routes = await core.routes_for(identity, body.language_id, body.text)
    lenses = build_code_lenses(routes, enabled=core.settings.ENABLE_CODELENS)
    return success_response(data={"lenses": lenses}, identity=identity)


@router.post("/documents/tree/{identity:path}")
async def document_tree(identity: str, body: DocumentBody, core: RouteScopeCore = Depends(get_core)):
    routes = await core.routes_for(identity, body.language_id, body.text)
    return success_response(data={"items": build_tree_items(routes)}, identity=identity)


@router.delete("/documents/{identity:path}")
async def close_document(identity: str, core: RouteScopeCore = Depends(get_core)):
    """
    Forget a closed document: drops its cache entry and any pending recomputation.
    """
    core.close_document(identity)
    return success_response(message="Document forgotten", identity=identity)


@router.post("/cache/clear")
async def clear_cache(core: RouteScopeCore = Depends(get_core)):
    core.clear_cache()
    return success_response(message="Route cache cleared")


@router.get("/parsers")
def list_parsers(core: RouteScopeCore = Depends(get_core)):
    return success_response(data={"parsers": core.registry.describe()})


@router.get("/cache/stats")
def cache_stats(core: RouteScopeCore = Depends(get_core)):
    """
    Hit/miss/extraction counters of the recomputation scheduler.
    """
    return success_response(data=core.scheduler.stats.as_dict())
