"""Load, project and store a results document."""

from results_cleaner.transform.projection import omit_key, project_records
from results_cleaner.transform.service import clean_results

__all__ = ["clean_results", "omit_key", "project_records"]
