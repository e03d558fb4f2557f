"""Application-level errors raised by adapters and use cases."""


class SiteGateError(Exception):
    """Base class for errors surfaced to the API layer."""


class BackendUnavailableError(SiteGateError):
    """The backend could not be reached or answered with a server error."""


class InvalidSiteDataError(SiteGateError):
    """The backend returned site data that cannot be normalized."""


class SiteNotFoundError(SiteGateError):
    def __init__(self, site_id: int):
        super().__init__(f"Site {site_id} not found")
        self.site_id = site_id
