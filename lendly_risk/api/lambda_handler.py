# lendly_risk/api/lambda_handler.py
"""
AWS Lambda handler for the risk engine API using Mangum (ASGI adapter).

How it works:
- API Gateway invokes Lambda
- Mangum translates the event into an ASGI request
- FastAPI handles routing (/health, /config, /quote, /booking-quote)
- Response is returned back to API Gateway

Config loading:
- get_risk_config() runs at import time (cold start) so overrides from
  LENDLY_RISK_CONFIG are read once per container, not per request.
"""

from __future__ import annotations

from mangum import Mangum

from lendly_risk.api.app import app
from lendly_risk.quoting.service import get_risk_config
from lendly_risk.utils.config import env_flag

if env_flag("PRELOAD_CONFIG", default=True):
    get_risk_config()


handler = Mangum(app)
