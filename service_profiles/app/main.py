"""
Profiles service for the User Profile Access Layer.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Query

from shared.base_service import BaseService
from shared.config import ServiceConfig
from .auth import BearerAuthenticator, TokenVerifier, TrustPolicy, VerifiedIdentity, default_notifier
from .demo import DemoProfileProvider, DemoProfileSummary
from .search import CriteriaResolver, PageResult, SearchRequest, paginate


def _serialize_profile(profile: DemoProfileSummary) -> Dict[str, Any]:
    return profile.model_dump(mode="json", by_alias=True)


class ProfilesService(BaseService):
    """Profiles service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        trust_policy: Optional[TrustPolicy] = None,
        provider: Optional[DemoProfileProvider] = None,
    ):
        super().__init__("profiles", 8020, config=config)

        self.trust_policy = trust_policy or TrustPolicy.from_config(self.config)
        self.notifier = default_notifier(self.metrics)
        self.token_verifier = TokenVerifier(self.trust_policy, self.notifier)
        self.authenticator = BearerAuthenticator(self.token_verifier)

        self.criteria_resolver = CriteriaResolver(
            default_page_size=self.config.search_default_page_size,
            max_page_size=self.config.search_max_page_size,
        )
        self.provider = provider or DemoProfileProvider(
            pool_size=self.config.demo_pool_size,
            max_profiles=self.config.demo_max_profiles,
        )

        self._setup_profile_routes()

    def _setup_profile_routes(self):
        """Set up profile-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "profiles",
                "message": "User Profile Access Layer - Profiles Service",
                "version": "1.0.0"
            }

        @self.app.get("/api/auth/me")
        async def whoami(identity: VerifiedIdentity = Depends(self.authenticator)):
            """Return the identity proven by the bearer token."""
            return identity.to_dict()

        @self.app.post("/api/profiles/search")
        async def search_profiles(
            search: SearchRequest,
            identity: VerifiedIdentity = Depends(self.authenticator),
        ):
            """Authenticated profile search."""
            page = self._search(search, endpoint="profiles")
            self.logger.info(
                "Profile search",
                subject=identity.subject,
                returned=len(page.items),
                total_count=page.total_count
            )
            return page.to_envelope(_serialize_profile)

        @self.app.get("/api/demo/health")
        async def demo_health():
            """Health check for demo endpoints."""
            return {
                "status": "Healthy",
                "service": "Profiles Demo Mode",
                "availableEndpoints": [
                    "GET /api/demo/profiles",
                    "GET /api/demo/profiles/{id}",
                    "POST /api/demo/search"
                ]
            }

        @self.app.get("/api/demo/profiles")
        async def demo_profiles(count: int = Query(10)):
            """Return demo profile summaries."""
            return [_serialize_profile(profile) for profile in self.provider.generate_profiles(count)]

        @self.app.get("/api/demo/profiles/{profile_id}")
        async def demo_profile(profile_id: int):
            """Return a detailed demo profile."""
            return self.provider.profile_detail(profile_id).model_dump(mode="json", by_alias=True)

        @self.app.post("/api/demo/search")
        async def demo_search(search: SearchRequest):
            """Search the demo pool without authentication."""
            page = self._search(search, endpoint="demo")
            self.logger.info("Demo search", returned=len(page.items), total_count=page.total_count)
            return page.to_envelope(_serialize_profile)

    def _search(self, search: SearchRequest, endpoint: str) -> PageResult[DemoProfileSummary]:
        criteria = self.criteria_resolver.resolve(search)
        page = paginate(self.provider.candidates(), criteria)

        self.metrics.increment_counter("search_queries_total", endpoint=endpoint)
        self.metrics.observe_histogram("search_results_returned", len(page.items))
        return page

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report the trust policy state."""
        return {
            "trust_policy": "ok" if self.trust_policy.algorithms else "error",
        }


def create_app(
    config: Optional[ServiceConfig] = None,
    trust_policy: Optional[TrustPolicy] = None,
    provider: Optional[DemoProfileProvider] = None,
):
    """Create FastAPI application."""
    service = ProfilesService(config=config, trust_policy=trust_policy, provider=provider)
    return service.app


if __name__ == "__main__":
    service = ProfilesService()
    service.run()
