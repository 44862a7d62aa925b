"""Infrastructure layer: persistence of lookup entities.

- **database**: Models, engine/session management, retry executor and the
  generic lookup repository
- **repositories**: One concrete repository per lookup entity type
"""
