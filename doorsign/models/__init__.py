"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate and `SQLModel.metadata.create_all` rely on
  `SQLModel.metadata`, which is populated only when the table models are
  imported.
- The SQL store imports `doorsign.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from doorsign.status.models import StatusHistory  # noqa: F401
from doorsign.status_option.models import StatusOption  # noqa: F401
from doorsign.sync.models import SyncStatus  # noqa: F401
from doorsign.user.models import User  # noqa: F401
