"""
Business Intelligence & Decision Pipeline

Layer Structure:
- Domain: entities, repository and gateway contracts, pure services
- Application: use cases and DTOs
- Infrastructure: MongoDB repositories, AI service gateway, health checks
- Presentation: FastAPI controllers
- Shared: logging and constants
- Main: configuration, dependency container and entry points
"""
