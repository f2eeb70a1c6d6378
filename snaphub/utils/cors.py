from starlette.middleware.cors import CORSMiddleware


def is_origin_allowed(origin: str | None, allowlist: list[str]) -> bool:
    # same-origin and non-browser requests carry no Origin header
    if not origin:
        return True
    if "*" in allowlist:
        return True
    return origin in allowlist


class AllowListCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose origin check is `is_origin_allowed`."""

    def __init__(self, app, allowlist: list[str], **kwargs):
        super().__init__(app, allow_origins=allowlist, **kwargs)
        self.allowlist = allowlist

    def is_allowed_origin(self, origin: str) -> bool:
        return is_origin_allowed(origin, self.allowlist)
