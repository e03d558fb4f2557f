"""Port interface for loading site boundaries."""

from abc import ABC, abstractmethod

from sitegate.domain.entities.site import Site


class SiteRepository(ABC):
    @abstractmethod
    async def get_site(self, site_id: int, token: str | None = None) -> Site | None:
        """Load a site's geometry and centre, already normalized to (lat, lon).

        Returns None if the site does not exist.
        """
        ...
