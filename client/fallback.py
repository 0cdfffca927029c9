import copy
from typing import Any, Dict, List, Tuple

from shared.samples import SAMPLE_COMMENTS, SAMPLE_DOCUMENTARIES


def fallback_dataset() -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Fresh copies of the built-in documentaries and comments, safe to mutate."""
    return copy.deepcopy(SAMPLE_DOCUMENTARIES), copy.deepcopy(SAMPLE_COMMENTS)
