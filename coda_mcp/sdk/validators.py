import re
from coda_mcp.sdk.exceptions import InvalidDocIdError

# Anything with a scheme or the coda.io host is treated as a browser URL.
DOC_URL_REGEX = re.compile(r'^(?:https?://)?(?:www\.)?coda\.io/', re.IGNORECASE)

# Doc URLs look like https://coda.io/d/Doc-Title_dAbCdEf123/Page_su1; the ID
# follows the last "_d" in the path segment after /d/.
DOC_ID_IN_URL_REGEX = re.compile(r'coda\.io/d/[^/?#]*_d([A-Za-z0-9_-]+)', re.IGNORECASE)

def resolve_doc_id(doc_id: str) -> str:
    """
    Return the bare doc ID for either an ID or a Coda doc URL.

    Args:
        doc_id: A document ID or a browser URL pointing into the doc.

    Raises:
        InvalidDocIdError: If the value is empty or a URL without a doc ID.
    """
    if not isinstance(doc_id, str) or not doc_id.strip():
        raise InvalidDocIdError("Invalid docId.")

    doc_id = doc_id.strip()
    if not DOC_URL_REGEX.match(doc_id) and "://" not in doc_id:
        return doc_id

    match = DOC_ID_IN_URL_REGEX.search(doc_id)
    if not match:
        raise InvalidDocIdError("Invalid docId. This URL does not point to a Coda doc.")
    return match.group(1)
