"""
Weather backend root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, security and cross-cutting utilities
- services/  : Business logic and orchestration
- llm/       : AI provider integration, model cascade and response parsing
- models/    : Pydantic models for request/response schemas
"""
