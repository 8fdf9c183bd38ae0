# Importing a source module registers it
from . import braintrust_api  # noqa: F401
