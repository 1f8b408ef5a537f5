"""
Navigation endpoints.

Resolves any site URL through the same pipeline the client runs:
normalize, dispatch, gate, compose.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from modules.access import GateChain, load_gate_context
from modules.app_settings.interfaces import ISettingsProvider
from modules.auth.interfaces import IAdminAllowList, ISessionProvider
from modules.i18n import DEFAULT_LANGUAGE, Language, strip_language
from modules.navigation import normalize_path, split_url
from modules.routing import RouteDispatcher
from modules.shell import ShellComposer
from shared.config import get_settings

from ..dependencies import (
    get_allow_list,
    get_dispatcher,
    get_gate_chain,
    get_request_session_provider,
    get_settings_provider,
    get_shell_composer,
)
from ..models.navigation import ResolveResponse, RouteInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_path(
    path: str = Query(..., description="URL to resolve, e.g. /member/dashboard?tab=1"),
    lang: Optional[Language] = Query(None, description="Preferred language for unprefixed paths"),
    sessions: ISessionProvider = Depends(get_request_session_provider),
    settings: ISettingsProvider = Depends(get_settings_provider),
    allow_list: IAdminAllowList = Depends(get_allow_list),
    dispatcher: RouteDispatcher = Depends(get_dispatcher),
    chain: GateChain = Depends(get_gate_chain),
    composer: ShellComposer = Depends(get_shell_composer),
) -> ResolveResponse:
    """
    Resolve a URL.

    Works with or without a bearer token; without one the session is
    absent and gated routes answer needs-login.
    """
    fallback = lang or Language.parse(get_settings().default_language) or DEFAULT_LANGUAGE
    location = split_url(path)
    normalized = normalize_path(location.pathname, fallback)

    match = dispatcher.dispatch(strip_language(normalized.pathname))
    requirements = match.route.requirements
    ctx = await load_gate_context(
        canonical_path=normalized.pathname,
        residual_path=match.residual_path,
        language=normalized.language,
        requirements=requirements,
        sessions=sessions,
        settings=settings,
        allow_list=allow_list,
    )
    decision = chain.evaluate(ctx, requirements)
    logger.debug(f"Resolved {path} -> {normalized.pathname} ({match.name}, {decision.render.value})")

    return ResolveResponse(
        path=path,
        canonical_path=f"{normalized.pathname}{location.search}{location.hash}",
        redirect=normalized.rewritten,
        language=normalized.language,
        route=RouteInfo(
            name=match.route.name,
            pattern=match.route.pattern.template,
            page=match.route.page,
            params=dict(match.params),
            fallback=match.fallback,
            auth_page=match.route.auth_page,
            gates=[r.kind.value for r in requirements],
        ),
        decision=decision,
        shell=composer.compose(normalized.pathname, match, decision),
    )
