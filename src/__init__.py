"""VibeCRM lookup persistence core.

Type and status lookup tables of the CRM (account statuses, call types,
payment methods, states...) are read and written through one generic
repository that retries transient database failures.

Architecture Overview:
- **Core Layer**: Configuration, logging, errors and tracing
- **Infrastructure Layer**: Models, sessions, retry executor, repositories
- **Application Layer**: Commands, queries, handlers and the mediator
"""
