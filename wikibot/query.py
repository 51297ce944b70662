import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

def recursive_merge(target, other):
    for key, value in other.items():
        current = target.get(key)
        if isinstance(current, list) and isinstance(value, list):
            current.extend(value)
        elif isinstance(current, dict) and isinstance(value, dict):
            recursive_merge(current, value)
        else:
            target[key] = value
    return target

def add_param(request, name, value):
    if isinstance(request, str):
        kept = [part for part in request.split("&") if part and not part.startswith(f"{name}=")]
        kept.append(f"{name}={quote(str(value), safe='')}")
        return "&".join(kept)
    return {**request, name: value}

def continuation_token(response, field, param):
    marker = response.get("query-continue")
    if not isinstance(marker, dict):
        return None
    return (marker.get(field) or {}).get(param)

def run_continued(issue_once, request, field, param, limit=None):
    limit = None if limit is None else max(limit, 1)
    response = issue_once(request)
    partials = [response]
    while limit is None or len(partials) < limit:
        token = continuation_token(response, field, param)
        if token is None:
            break
        request = add_param(request, param, token)
        logger.debug(f"Continuing {field} with {param}={token}")
        response = issue_once(request)
        partials.append(response)

    merged = partials[0]
    for partial in partials[1:]:
        recursive_merge(merged, partial)
    return merged
