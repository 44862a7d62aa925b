"""Cross-cutting concerns shared by the persistence and application layers.

- **config**: Pydantic settings with nested sections and env overrides
- **context**: Correlation ID propagation
- **exceptions**: Exception hierarchy with error codes and severities
- **error_context**: Redaction of sensitive values before logging
- **logging**: Loguru setup (console and JSON formatters)
- **observability**: OpenTelemetry tracing
- **types**: Shared type aliases
"""
