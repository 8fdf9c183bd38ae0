from .talent_summary import TalentSummary, TalentUser
from .page_result import PageResult
from .detail_lookup import DetailLookup, Found, NotFound
from .upsert_result import UpsertResult
from .scrape_totals import ScrapeTotals
from .talent_listing import ListingFilters, Pagination, TalentListing

__all__ = [
    "TalentSummary",
    "TalentUser",
    "PageResult",
    "DetailLookup",
    "Found",
    "NotFound",
    "UpsertResult",
    "ScrapeTotals",
    "ListingFilters",
    "Pagination",
    "TalentListing",
]
