import os
from dataclasses import dataclass
from typing import Mapping, Optional

from aws_bill_audit.errors import ConfigurationError

# ----------------------------
# Config
# ----------------------------
REGION = 'ap-south-1'
PRICING_LOCATION = 'Asia Pacific (Mumbai)'

ACCESS_KEY_ENV = 'AWS_ACCESS_KEY_ID'
SECRET_KEY_ENV = 'AWS_ACCESS_SECRET_KEY'
SECRET_KEY_ENV_FALLBACK = 'AWS_SECRET_ACCESS_KEY'


@dataclass(frozen=True)
class AuditConfig:
    access_key_id: str
    secret_access_key: str
    region: str = REGION
    pricing_location: str = PRICING_LOCATION

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'AuditConfig':
        """
        Build the config from the process environment.
        Raises ConfigurationError if either credential is missing or empty.
        """
        env = os.environ if environ is None else environ
        access_key = env.get(ACCESS_KEY_ENV) or ''
        secret_key = env.get(SECRET_KEY_ENV) or env.get(SECRET_KEY_ENV_FALLBACK) or ''
        if not access_key.strip() or not secret_key.strip():
            raise ConfigurationError('AWS Access Key ID and Secret Access Key must be provided')
        return cls(access_key_id=access_key, secret_access_key=secret_key)
