"""Link metadata router: categorize and extract-title."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from linkstash.auth.dependencies import get_optional_user
from linkstash.exceptions import ClassifierNotConfiguredError, FetchError, InvalidUrlError
from linkstash.models.metadata import CategorizeResponse, ExtractTitleResponse, UrlRequest
from linkstash.services.link_pipeline import LinkPipeline, get_link_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["metadata"])

FETCH_FAILED_MESSAGE = "Could not retrieve content from the URL."
NOT_CONFIGURED_MESSAGE = "Categorization service is not configured."


@router.post("/categorize", response_model=CategorizeResponse)
async def categorize(
    request: UrlRequest,
    pipeline: LinkPipeline = Depends(get_link_pipeline),
    current_user: Optional[dict] = Depends(get_optional_user),
) -> CategorizeResponse:
    """
    Scrape a URL and assign it a category and 1-3 tags.

    When the request carries a valid bearer token the category and tags
    are also added to that user's vocabulary.

    Errors:
    - 400: invalid URL, or the page could not be fetched
    - 500: classifier not configured, or an unexpected failure
    """
    user_id = current_user["user_id"] if current_user else None

    try:
        return await pipeline.categorize(request.url, user_id=user_id)
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FetchError as e:
        logger.warning(f"Categorize fetch failed for {request.url}: {e} ({e.last_error!r})")
        raise HTTPException(status_code=400, detail=FETCH_FAILED_MESSAGE)
    except ClassifierNotConfiguredError:
        logger.error("ANTHROPIC_API_KEY is not set; cannot categorize")
        raise HTTPException(status_code=500, detail=NOT_CONFIGURED_MESSAGE)
    except Exception as e:
        logger.exception(f"Categorization failed for {request.url}: {e}")
        raise HTTPException(status_code=500, detail="Failed to categorize URL")


@router.post("/extract-title", response_model=ExtractTitleResponse)
async def extract_title(
    request: UrlRequest,
    pipeline: LinkPipeline = Depends(get_link_pipeline),
) -> ExtractTitleResponse:
    """
    Scrape a URL's title and description.

    Unreachable pages still succeed with a title derived from the URL;
    only an invalid URL is rejected.
    """
    try:
        return await pipeline.extract_title(request.url)
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Title extraction failed for {request.url}: {e}")
        raise HTTPException(status_code=500, detail="Failed to extract title from URL.")
