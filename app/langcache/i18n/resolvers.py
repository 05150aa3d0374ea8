"""Candidate language resolution.

Builds the ordered list of language codes to try from the forced language,
the request, the session, the Accept-Language header and the fallback.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional
from urllib.parse import parse_qs

from langcache.logging import get_module_logger
from langcache.validation import is_language_code

logger = get_module_logger()

LANG_PARAMETER = "lang"


@dataclass(frozen=True)
class RequestContext:
    """Language signals taken from the current request.

    Values are kept as supplied; non-string values are ignored during
    resolution.

    Attributes:
        request_lang: Value of the ``lang`` request parameter.
        session_lang: Value of ``lang`` stored in the user's session.
        accept_language: Raw Accept-Language header.
    """

    request_lang: Optional[Any] = None
    session_lang: Optional[Any] = None
    accept_language: Optional[str] = None

    @classmethod
    def from_wsgi_environ(
        cls,
        environ: Mapping[str, Any],
        session: Optional[Mapping[str, Any]] = None,
    ) -> "RequestContext":
        """Build a RequestContext from a WSGI environ and an optional session.

        Args:
            environ: WSGI environ of the current request.
            session: Session mapping, read for its ``lang`` entry.

        Returns:
            RequestContext with the request, session and header values.
        """
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        values = query.get(LANG_PARAMETER)
        return cls(
            request_lang=values[0] if values else None,
            session_lang=session.get(LANG_PARAMETER) if session else None,
            accept_language=environ.get("HTTP_ACCEPT_LANGUAGE"),
        )


def resolve_candidates(
    forced: Optional[str],
    request_lang: Optional[Any],
    session_lang: Optional[Any],
    accept_language: Optional[str],
    fallback: str,
) -> List[str]:
    """Return the language codes to try, highest priority first.

    Order: forced language, request parameter, session value, each
    Accept-Language segment (first two characters, lowercased) and finally
    the fallback. Duplicates are removed keeping the first occurrence, then
    codes outside ``[a-zA-Z0-9_-]*`` are dropped. Filtering after
    deduplication lets an illegal forced language drop out without hiding a
    legal lower priority value.

    Args:
        forced: Forced language, if any.
        request_lang: Request parameter value, used only if it is a string.
        session_lang: Session value, used only if it is a string.
        accept_language: Raw Accept-Language header.
        fallback: Fallback language, always appended last.

    Returns:
        Ordered list of legal language codes.
    """
    raw: List[str] = []

    if forced is not None:
        raw.append(forced)

    if isinstance(request_lang, str):
        raw.append(request_lang)

    if isinstance(session_lang, str):
        raw.append(session_lang)

    if accept_language is not None:
        for part in accept_language.split(","):
            raw.append(part[:2].lower())

    raw.append(fallback)

    unique = list(dict.fromkeys(raw))
    candidates = [code for code in unique if is_language_code(code)]

    dropped = [code for code in unique if code not in candidates]
    if dropped:
        logger.info("dropped_illegal_language_codes", dropped=dropped)
    if fallback not in candidates:
        logger.warning("illegal_fallback_language", fallback=fallback)

    return candidates


class CandidateResolver:
    """Resolves the candidate list for a request.

    Attributes:
        fallback_lang: Lowest priority language, always appended.
        forced_lang: Optional language that outranks every request signal.
    """

    def __init__(self, fallback_lang: str, forced_lang: Optional[str] = None):
        self.fallback_lang = fallback_lang
        self.forced_lang = forced_lang
        self.log = logger.bind(fallback_lang=fallback_lang, forced_lang=forced_lang)

    def resolve(self, context: Optional[RequestContext] = None) -> List[str]:
        """Resolve candidates from a request context.

        Args:
            context: Request signals; no context means only the forced and
                fallback languages are considered.

        Returns:
            Ordered list of legal language codes.
        """
        context = context or RequestContext()
        candidates = resolve_candidates(
            forced=self.forced_lang,
            request_lang=context.request_lang,
            session_lang=context.session_lang,
            accept_language=context.accept_language,
            fallback=self.fallback_lang,
        )
        self.log.debug("resolved_candidates", candidates=candidates)
        return candidates
