"""Region-bound ECS clients built from explicit credentials."""
import logging
from typing import Iterable, List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError

from ecswipe.core.config import Credentials
from ecswipe.core.errors import ClientProviderError


class ClientProvider:
    """Hands out one ECS client per region.

    boto3 clients are thread-safe, so the client returned for a region is
    shared by every concurrent operation in that region's batch.
    """

    def __init__(self, credentials: Credentials, session_factory=boto3.session.Session):
        self.credentials = credentials
        try:
            self.session = session_factory(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                aws_session_token=credentials.session_token,
                region_name=credentials.region,
            )
        except (BotoCoreError, ValueError) as e:
            raise ClientProviderError(f"Cannot create AWS session: {e}") from e

    @property
    def default_region(self) -> str:
        return self.credentials.region

    def client(self, region: Optional[str] = None):
        region = region or self.default_region
        try:
            ecs = self.session.client('ecs', region_name=region)
        except (BotoCoreError, ValueError) as e:
            raise ClientProviderError(f"Cannot create ECS client for {region}: {e}") from e
        logging.debug(f"[{region}] ECS client created")
        return ecs

    def clients_for(self, regions: Iterable[str]) -> List[Tuple[str, object]]:
        """Build every client up front so a bad region aborts before any deletion."""
        return [(region, self.client(region)) for region in regions]
