"""
Configuration management for the inventory CLI.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

@dataclass
class Config:
    """Configuration settings for the inventory CLI."""
    
    # Database settings
    database_url: str
    echo_sql: bool = False
    
    # Logging settings
    log_level: str = 'WARNING'
    
    # Catalog loading settings
    batch_size: int = 100
    
    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.
        
        Args:
            env_file: Optional path to .env file
            
        Returns:
            Config: Configuration instance
            
        Raises:
            ValueError: If required environment variables are missing
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
            
        database_url = os.getenv('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")
            
        config = cls(
            database_url=database_url,
            echo_sql=os.getenv('ECHO_SQL', 'false').lower() == 'true',
            log_level=os.getenv('LOG_LEVEL', 'WARNING'),
            batch_size=int(os.getenv('BATCH_SIZE', '100'))
        )
        config.validate()
        return config
    
    def validate(self) -> bool:
        """Validate configuration settings.
        
        Returns:
            bool: True if configuration is valid
        """
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
            
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
            
        return True
