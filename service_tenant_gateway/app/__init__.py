"""
Tenant API Gateway service package.

The service proxies a handful of calls to the tenant management cloud API
on behalf of the desktop UI:
- Tenant retrieval and update
- Venue, wifi network and access point queries

Structure:
- app.main: FastAPI app exposing the operations as commands.
- app.gateway: request specs, per-call models and the async HTTP gateway.
"""
