from __future__ import annotations

from .annotations import iter_page_annotations, page_annotations
from .document import iter_pages, open_document
from .nearest import annotation_key
from .types import AnnotationType


def extract_annotation_content(
    data: bytes, annotation_type: AnnotationType | str | None = None
) -> dict[int, dict[str, str]]:
    """Trimmed annotation contents per page, keyed "<page>_<ordinal>".

    With no annotation_type every annotation on the page is enumerated;
    otherwise the same filter as extract_annotations applies, so keys line up
    with find_nearest_words. Annotations without /Contents produce no entry.
    """
    out: dict[int, dict[str, str]] = {}
    with open_document(data) as doc:
        for page_number, page in iter_pages(doc):
            if annotation_type is None:
                annotations = list(iter_page_annotations(page))
            else:
                annotations = page_annotations(page, annotation_type)
            out[page_number] = {
                annotation_key(page_number, ordinal): a.content.strip()
                for ordinal, a in enumerate(annotations, start=1)
                if a.content is not None
            }
    return out
