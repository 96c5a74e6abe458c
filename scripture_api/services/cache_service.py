"""Redis caching service for the Scripture Reader API."""
import hashlib
import json
import logging
from typing import Any, Optional

import redis
from redis.exceptions import RedisError

from scripture_api.config import get_settings

logger = logging.getLogger(__name__)

# Global Redis client
_redis_client: Optional[redis.Redis] = None


def initialize_redis() -> None:
    """Initialize the Redis client."""
    global _redis_client
    
    if _redis_client is not None:
        logger.warning("Redis client already initialized")
        return
    
    settings = get_settings()
    
    if not settings.cache_enabled:
        logger.info("Caching is disabled in settings")
        return
    
    try:
        _redis_client = redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30
        )
        # Test connection
        _redis_client.ping()
        logger.info(f"Redis client initialized: {settings.redis_url}")
    except RedisError as e:
        logger.error(f"Failed to initialize Redis client: {e}")
        _redis_client = None
        # Don't raise - degrade gracefully without cache


def close_redis() -> None:
    """Close the Redis client connection."""
    global _redis_client
    
    if _redis_client is not None:
        try:
            _redis_client.close()
            logger.info("Redis client closed")
        except RedisError as e:
            logger.error(f"Error closing Redis client: {e}")
        finally:
            _redis_client = None


def _get_client() -> Optional[redis.Redis]:
    """Get the Redis client if available."""
    return _redis_client


def _generate_cache_key(prefix: str, *args: Any) -> str:
    """Generate a cache key from prefix and arguments.
    
    Args:
        prefix: Key prefix (e.g., 'versions', 'word_search')
        *args: Values to include in the key
        
    Returns:
        Cache key string
    """
    # Normalize arguments to strings
    normalized = []
    for arg in args:
        if isinstance(arg, str):
            normalized.append(arg.lower().strip())
        elif isinstance(arg, (dict, list)):
            normalized.append(json.dumps(arg, sort_keys=True))
        else:
            normalized.append(str(arg))
    
    # Create hash of normalized arguments for consistent key length
    content = ":".join(normalized)
    content_hash = hashlib.sha256(content.encode()).hexdigest()[:16]
    
    return f"{prefix}:{content_hash}"


class CacheService:
    """Service for caching book lists, version lists and word search results."""
    
    @staticmethod
    def get(key: str) -> Optional[Any]:
        """Get a value from cache.
        
        Args:
            key: Cache key
            
        Returns:
            Cached value or None if not found or error
        """
        client = _get_client()
        if client is None:
            return None
        
        try:
            value = client.get(key)
            if value is None:
                logger.info(f"Cache miss for key: {key[:50]}...")
                return None
            
            logger.info(f"Cache hit for key: {key[:50]}...")
            
            # Try to parse as JSON
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
                
        except RedisError as e:
            logger.error(f"Cache get error for key {key}: {e}")
            return None
    
    @staticmethod
    def set(key: str, value: Any, ttl: int = 0) -> bool:
        """Set a value in cache.
        
        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (0 = no expiry)
            
        Returns:
            True if successful, False otherwise
        """
        client = _get_client()
        if client is None:
            return False
        
        try:
            # Serialize value as JSON
            if isinstance(value, (dict, list)):
                serialized = json.dumps(value, default=str)
            else:
                serialized = str(value)
            
            if ttl > 0:
                client.setex(key, ttl, serialized)
            else:
                client.set(key, serialized)
            
            return True
            
        except RedisError as e:
            logger.error(f"Cache set error for key {key}: {e}")
            return False
    
    @staticmethod
    def delete(key: str) -> bool:
        """Delete a key from cache.
        
        Args:
            key: Cache key
            
        Returns:
            True if successful, False otherwise
        """
        client = _get_client()
        if client is None:
            return False
        
        try:
            client.delete(key)
            return True
        except RedisError as e:
            logger.error(f"Cache delete error for key {key}: {e}")
            return False
    
    @staticmethod
    def clear_pattern(pattern: str) -> int:
        """Clear all keys matching a pattern.
        
        Args:
            pattern: Key pattern (e.g., 'versions:*')
            
        Returns:
            Number of keys deleted
        """
        client = _get_client()
        if client is None:
            return 0
        
        try:
            keys = client.keys(pattern)
            if keys:
                return client.delete(*keys)
            return 0
        except RedisError as e:
            logger.error(f"Cache clear pattern error for {pattern}: {e}")
            return 0
    
    # Convenience methods for specific cache types

    @staticmethod
    def get_books() -> Optional[list]:
        """Get the cached canonical book list."""
        return CacheService.get("books:all")

    @staticmethod
    def set_books(books: list) -> bool:
        """Cache the book list (Bible content only changes on re-import)."""
        settings = get_settings()
        return CacheService.set("books:all", books, ttl=settings.cache_ttl_books)

    @staticmethod
    def get_versions(language_code: Optional[str] = None) -> Optional[list]:
        """Get the cached version list for an optional language filter."""
        key = _generate_cache_key("versions", language_code or "all")
        return CacheService.get(key)

    @staticmethod
    def set_versions(language_code: Optional[str], versions: list) -> bool:
        """Cache the version list."""
        settings = get_settings()
        key = _generate_cache_key("versions", language_code or "all")
        return CacheService.set(key, versions, ttl=settings.cache_ttl_versions)

    @staticmethod
    def get_word_search(word: str, context: str) -> Optional[dict]:
        """Get cached web search results for a word lookup."""
        key = _generate_cache_key("word_search", word, context)
        return CacheService.get(key)

    @staticmethod
    def set_word_search(word: str, context: str, results: dict) -> bool:
        """Cache web search results for a word lookup."""
        settings = get_settings()
        key = _generate_cache_key("word_search", word, context)
        return CacheService.set(key, results, ttl=settings.cache_ttl_word_search)

    @staticmethod
    def invalidate_bible_content() -> None:
        """Drop the cached book and version lists after an import changed the verse data."""
        CacheService.delete("books:all")
        removed = CacheService.clear_pattern("versions:*")
        logger.info(f"Invalidated cached book list and {removed} version list(s)")
