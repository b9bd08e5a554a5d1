from pydantic_settings import BaseSettings
from typing import List, Optional, Union
import os
import json
import re


class Settings(BaseSettings):
    app_name: str = "Product Catalog API"
    app_version: str = "1.0.0"
    database_url: str = "sqlite+aiosqlite:///./product_catalog.db"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 8000
    # CORS origins - can be JSON array or comma-separated string
    # "localhost:*" matches any localhost port
    cors_origins: Union[List[str], str] = ["localhost:*", "127.0.0.1:*"]
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list, accepting JSON or comma-separated strings."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]

    def get_cors_origin_regex(self) -> Optional[str]:
        """
        Build a single regex out of the wildcard entries in cors_origins.

        Supports:
        - "localhost:*" - any localhost port (http://localhost:3000, https://localhost:8443, ...)
        - "127.0.0.1:*" - any 127.0.0.1 port
        - generic patterns like "https://*.example.com"
        """
        patterns = []
        for allowed in self.get_cors_origins_list():
            if allowed == "*":
                continue
            if allowed == "localhost:*":
                patterns.append(r"https?://localhost(:\d+)?")
            elif allowed == "127.0.0.1:*":
                patterns.append(r"https?://127\.0\.0\.1(:\d+)?")
            elif "*" in allowed:
                patterns.append(".*".join(re.escape(part) for part in allowed.split("*")))

        if not patterns:
            return None
        return "^(" + "|".join(patterns) + ")$"

    def get_exact_cors_origins(self) -> List[str]:
        """Origins without wildcard ports; a bare "*" is passed through."""
        return [o for o in self.get_cors_origins_list() if o == "*" or "*" not in o]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgresql")

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False


settings = Settings()
