import json
import hashlib
from functools import lru_cache
from typing import Dict, List, Optional

import redis

from focusday.config.settings import get_settings

settings = get_settings()


class PlanCache:
    def __init__(self, redis_url: str, ttl_seconds: int = settings.plan_cache_ttl_seconds):
        self.redis_client = redis.from_url(redis_url, decode_responses=True)
        self.ttl_seconds = ttl_seconds

    def get(self, plan_hash: str) -> Optional[Dict]:
        """Retrieve a cached plan by input hash."""
        cached = self.redis_client.get(f"plan:{plan_hash}")
        if cached:
            return json.loads(cached)
        return None

    def set(self, plan_hash: str, plan: Dict) -> None:
        """Cache a rendered plan for ttl_seconds."""
        self.redis_client.setex(
            f"plan:{plan_hash}",
            self.ttl_seconds,
            json.dumps(plan, default=str)
        )

    @staticmethod
    def hash_inputs(tasks: List[Dict], day_start: str, day_end: str) -> str:
        """Generate hash from the open tasks and the day window."""
        data = json.dumps({"tasks": tasks, "day_start": day_start, "day_end": day_end}, sort_keys=True, default=str)
        return hashlib.sha256(data.encode()).hexdigest()[:16]

    def health_check(self) -> bool:
        """Check Redis connection."""
        try:
            self.redis_client.ping()
            return True
        except redis.RedisError:
            return False


@lru_cache(maxsize=1)
def get_cache() -> Optional[PlanCache]:
    """Shared plan cache, or None when REDIS_URL is not configured."""
    if not settings.redis_url:
        return None
    return PlanCache(settings.redis_url)
