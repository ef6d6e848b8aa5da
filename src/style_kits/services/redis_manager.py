"""
Redis Manager Service.

Shared Redis connection for the catalog cache and favorites storage, with
connection pooling, retry logic, a circuit breaker and health reporting.
"""

import asyncio
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import urlparse

import redis.asyncio as redis
from redis.asyncio import ConnectionPool
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger("style_kits.services.redis_manager")

RedisOperation = Callable[[redis.Redis], Awaitable[Any]]


class CircuitBreakerError(Exception):
    """Raised when circuit breaker is open."""

    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RedisManager:
    """
    Centralized Redis access with connection pooling, retries and a circuit breaker.

    Callers pass an async operation taking the client; failures are retried on
    connection errors and counted towards the breaker, which fails fast once
    open so the catalog service can fall back to its in-process cache.
    """

    def __init__(self):
        """Initialize the Redis manager."""
        self._pool: Optional[ConnectionPool] = None
        self._redis: Optional[redis.Redis] = None
        self._pool_lock = asyncio.Lock()
        self._health_status = True
        self._last_health_check: Optional[datetime] = None

        self._error_count = 0
        self._success_count = 0
        self._circuit_breaker_state = "closed"  # closed, open, half_open
        self._circuit_breaker_failures = 0
        self._circuit_breaker_last_failure: Optional[datetime] = None
        self._circuit_breaker_failure_threshold = int(
            os.getenv("REDIS_CIRCUIT_FAILURE_THRESHOLD", "5")
        )
        self._circuit_breaker_recovery_timeout = int(
            os.getenv("REDIS_CIRCUIT_RECOVERY_TIMEOUT", "60")
        )

    @staticmethod
    def _connection_kwargs() -> Dict[str, Any]:
        """Build pool parameters from REDIS_URL or the individual REDIS_* variables."""
        redis_url = os.getenv("REDIS_URL")
        if redis_url:
            parsed = urlparse(redis_url)
            host = parsed.hostname or os.getenv("REDIS_HOST", "localhost")
            port = parsed.port or int(os.getenv("REDIS_PORT", "6379"))
            db = (
                int(parsed.path.lstrip("/"))
                if parsed.path.lstrip("/")
                else int(os.getenv("REDIS_DATABASE", "0"))
            )
            password = parsed.password or os.getenv("REDIS_PASSWORD")
        else:
            host = os.getenv("REDIS_HOST", "localhost")
            port = int(os.getenv("REDIS_PORT", "6379"))
            db = int(os.getenv("REDIS_DATABASE", "0"))
            password = os.getenv("REDIS_PASSWORD")

        kwargs: Dict[str, Any] = {
            "host": host,
            "port": port,
            "db": db,
            "max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "20")),
            "socket_timeout": float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0")),
            "socket_connect_timeout": float(
                os.getenv("REDIS_CONNECT_TIMEOUT", "5.0")
            ),
            "retry_on_timeout": True,
            "decode_responses": True,
        }
        if password:
            kwargs["password"] = password
        return kwargs

    async def _get_pool(self) -> ConnectionPool:
        """Get or create connection pool."""
        async with self._pool_lock:
            if self._pool is None:
                pool_kwargs = self._connection_kwargs()
                self._pool = ConnectionPool(**pool_kwargs)
                logger.info(
                    f"Created Redis connection pool: {pool_kwargs['host']}:{pool_kwargs['port']} "
                    f"(db={pool_kwargs['db']}, max_connections={pool_kwargs['max_connections']})"
                )
            return self._pool

    async def get_redis(self) -> redis.Redis:
        """Get Redis client with connection pooling."""
        if self._redis is None:
            pool = await self._get_pool()
            self._redis = redis.Redis(connection_pool=pool)
        return self._redis

    def _check_circuit_breaker(self) -> bool:
        """Check if circuit breaker allows operation."""
        if self._circuit_breaker_state != "open":
            return True
        if self._circuit_breaker_last_failure:
            elapsed = (_utcnow() - self._circuit_breaker_last_failure).total_seconds()
            if elapsed >= self._circuit_breaker_recovery_timeout:
                self._circuit_breaker_state = "half_open"
                self._circuit_breaker_failures = 0
                logger.info("Circuit breaker moving to half-open state")
                return True
        return False

    def _record_circuit_breaker_success(self):
        """Record successful operation for circuit breaker."""
        if self._circuit_breaker_state == "half_open":
            logger.info("Circuit breaker closed after successful operation")
        self._circuit_breaker_state = "closed"
        self._circuit_breaker_failures = 0

    def _record_circuit_breaker_failure(self):
        """Record failed operation for circuit breaker."""
        self._circuit_breaker_failures += 1
        self._circuit_breaker_last_failure = _utcnow()

        if self._circuit_breaker_state == "half_open":
            self._circuit_breaker_state = "open"
            logger.warning("Circuit breaker opened after failure in half-open state")
        elif self._circuit_breaker_failures >= self._circuit_breaker_failure_threshold:
            self._circuit_breaker_state = "open"
            logger.error(
                f"Circuit breaker opened after {self._circuit_breaker_failures} failures "
                f"(threshold: {self._circuit_breaker_failure_threshold})"
            )

    async def execute(self, operation: RedisOperation, *args, **kwargs) -> Any:
        """
        Execute a Redis operation with retry logic and circuit breaker.

        Args:
            operation: Async function that takes redis.Redis as first arg
            *args: Additional arguments for the operation
            **kwargs: Additional keyword arguments for the operation

        Returns:
            Result of the operation

        Raises:
            CircuitBreakerError: If the breaker is open or all retries failed
        """
        operation_name = getattr(operation, "__name__", "unknown")
        retry_attempts = int(os.getenv("REDIS_RETRY_ATTEMPTS", "3"))
        backoff_min = int(os.getenv("REDIS_RETRY_BACKOFF_MIN", "1"))
        backoff_max = int(os.getenv("REDIS_RETRY_BACKOFF_MAX", "5"))

        if not self._check_circuit_breaker():
            raise CircuitBreakerError(
                f"Circuit breaker is open (failures: {self._circuit_breaker_failures}/"
                f"{self._circuit_breaker_failure_threshold}). Operation '{operation_name}' blocked."
            )

        @retry(
            stop=stop_after_attempt(retry_attempts),
            wait=wait_exponential(multiplier=1, min=backoff_min, max=backoff_max),
            retry=retry_if_exception_type((redis.ConnectionError, redis.TimeoutError)),
            reraise=True,
        )
        async def _retry_operation():
            redis_client = await self.get_redis()
            start_time = time.time()
            try:
                result = await operation(redis_client, *args, **kwargs)
            except redis.RedisError as e:
                self._error_count += 1
                self._record_circuit_breaker_failure()
                logger.error(
                    f"Redis operation '{operation_name}' failed after "
                    f"{time.time() - start_time:.3f}s: {type(e).__name__}: {e}",
                    extra={"operation": operation_name},
                )
                raise
            self._success_count += 1
            self._record_circuit_breaker_success()
            return result

        try:
            return await _retry_operation()
        except (RetryError, redis.RedisError) as e:
            raise CircuitBreakerError(
                f"Redis operation '{operation_name}' failed after {retry_attempts} attempts. "
                f"Circuit breaker state: {self._circuit_breaker_state}"
            ) from e

    async def health_check(self) -> bool:
        """Ping Redis and update the health status."""
        timeout = float(os.getenv("REDIS_HEALTH_CHECK_TIMEOUT", "3.0"))
        try:
            redis_client = await self.get_redis()
            await asyncio.wait_for(redis_client.ping(), timeout=timeout)
            self._health_status = True
            self._record_circuit_breaker_success()
        except Exception as e:
            logger.warning(f"Redis health check failed: {type(e).__name__}: {e}")
            self._health_status = False
            self._record_circuit_breaker_failure()
        self._last_health_check = _utcnow()
        return self._health_status

    def get_health_status(self) -> Dict[str, Any]:
        """Get current health status."""
        total = self._success_count + self._error_count
        return {
            "healthy": self._health_status,
            "last_health_check": (
                self._last_health_check.isoformat() if self._last_health_check else None
            ),
            "circuit_breaker_state": self._circuit_breaker_state,
            "circuit_breaker_failures": self._circuit_breaker_failures,
            "total_operations": total,
            "success_count": self._success_count,
            "error_count": self._error_count,
            "error_rate": self._error_count / total if total else 0.0,
        }

    async def cleanup(self):
        """Cleanup Redis connections."""
        if self._redis:
            try:
                await self._redis.aclose()
            except Exception as e:
                logger.warning(f"Error closing Redis client: {e}")
            self._redis = None

        if self._pool:
            try:
                await self._pool.aclose()
            except Exception as e:
                logger.warning(f"Error closing connection pool: {e}")
            self._pool = None

        logger.info("Redis manager cleaned up")


# Global Redis manager instance
_redis_manager: Optional[RedisManager] = None


def get_redis_manager() -> RedisManager:
    """Get or create the global Redis manager instance."""
    global _redis_manager
    if _redis_manager is None:
        _redis_manager = RedisManager()
    return _redis_manager
