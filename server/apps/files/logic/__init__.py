"""Business logic layer for files app.

This package contains the file-tree logic:
- Boundary schema of node creation requests
- Ordered validation of tree rules
- Node persistence, listing and visibility
- Payload reads, including image renditions

Views only parse HTTP input and render results; every rule lives here,
separate from models (data layer) and infrastructure (external systems).
"""
