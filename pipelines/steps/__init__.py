# Namespace for pipeline steps
from .bootstrap_store import BootstrapStore  # noqa: F401
from .scrape_talents import ScrapeTalents  # noqa: F401
