import logging
from datetime import date
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import Settings, load_settings
from delivery.base import DeliveryError, ResultsMailer, ResultsStore
from delivery.mailer import LoggingMailer, ResendMailer
from delivery.models import FeedbackReport, FeedbackSubmission, ResultsEmailRequest
from delivery.storage import SQLiteResultsStore
from fitting.engine import fitting_engine
from fitting.models import FittingAdvice
from marketplace.links import MarketplaceLink, build_links
from playability.engine import category_for, playability_engine
from playability.models import ClubPreferences, PlayabilityResult, PlayerProfile

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Golf Club Finder API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class CalculationResponse(BaseModel):
    profile: PlayerProfile
    result: PlayabilityResult
    pro_tip: str
    fitting: FittingAdvice
    marketplace_links: List[MarketplaceLink]
    calculation_id: Optional[str] = None


class StatusResponse(BaseModel):
    success: bool
    id: Optional[str] = None


# ============================================================================
# DEPENDENCIES
# ============================================================================

@lru_cache
def get_store() -> ResultsStore:
    return SQLiteResultsStore(get_settings().db_path)


@lru_cache
def get_mailer() -> ResultsMailer:
    s = get_settings()
    if not s.resend_api_key:
        logger.warning("CLUBFINDER_RESEND_API_KEY is not set. Emails will be logged, not sent.")
        return LoggingMailer()
    return ResendMailer(
        api_key=s.resend_api_key,
        sender=s.email_from,
        feedback_sender=s.feedback_from,
        feedback_recipient=s.feedback_recipient,
        api_url=s.resend_api_url,
        timeout=s.request_timeout_s,
    )


def require_admin_export(s: Settings = Depends(get_settings)) -> None:
    if not s.admin_export_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {
        "message": "Golf Club Finder API",
        "version": "1.0.0",
        "endpoints": ["/calculate", "/calculations/{id}", "/email-results", "/feedback", "/health"],
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "playability_engine": "operational"}


@app.post("/calculate", response_model=CalculationResponse)
def calculate(
    profile: PlayerProfile,
    save: bool = False,
    store: ResultsStore = Depends(get_store),
):
    """Score a profile and attach fitting advice and shop links"""
    result = playability_engine.score(profile)

    calculation_id = None
    if save:
        try:
            calculation_id = store.save(profile, result)
        except DeliveryError as e:
            raise HTTPException(status_code=500, detail=str(e))

    return CalculationResponse(
        profile=profile,
        result=result,
        pro_tip=category_for(result.factor).pro_tip,
        fitting=fitting_engine.advise(profile),
        marketplace_links=build_links(result),
        calculation_id=calculation_id,
    )


@app.get("/calculations/{calculation_id}")
def get_calculation(
    calculation_id: str,
    store: ResultsStore = Depends(get_store),
):
    try:
        calculation = store.get_calculation(calculation_id)
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not calculation:
        raise HTTPException(status_code=404, detail=f"Calculation {calculation_id} not found")
    return calculation


@app.post("/calculations/{calculation_id}/preferences", response_model=StatusResponse)
def save_preferences(
    calculation_id: str,
    preferences: ClubPreferences,
    store: ResultsStore = Depends(get_store),
):
    try:
        updated = store.attach_preferences(calculation_id, preferences)
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not updated:
        raise HTTPException(status_code=404, detail=f"Calculation {calculation_id} not found")
    return StatusResponse(success=True, id=calculation_id)


@app.post("/email-results", response_model=StatusResponse)
def email_results(
    request: ResultsEmailRequest,
    mailer: ResultsMailer = Depends(get_mailer),
):
    """Email results, recomputed from the submitted profile"""
    result = playability_engine.score(request.profile)
    try:
        message_id = mailer.send_results(request.email, request.profile, result, request.preferences)
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return StatusResponse(success=True, id=message_id)


@app.post("/feedback", response_model=StatusResponse)
def submit_feedback(
    submission: FeedbackSubmission,
    store: ResultsStore = Depends(get_store),
    mailer: ResultsMailer = Depends(get_mailer),
):
    try:
        feedback_id = store.save_feedback(submission)
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))

    # Notification is best-effort once the feedback row exists
    try:
        mailer.send_feedback(submission)
    except DeliveryError as e:
        logger.error("Feedback %s saved but notification failed: %s", feedback_id, e)

    return StatusResponse(success=True, id=feedback_id)


@app.get("/admin/feedback", response_model=FeedbackReport, dependencies=[Depends(require_admin_export)])
def feedback_report(store: ResultsStore = Depends(get_store)):
    try:
        return FeedbackReport(summary=store.feedback_summary(), entries=store.list_feedback())
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/admin/feedback.csv", dependencies=[Depends(require_admin_export)])
def feedback_csv(store: ResultsStore = Depends(get_store)):
    try:
        csv_text = store.export_feedback_csv()
    except DeliveryError as e:
        raise HTTPException(status_code=500, detail=str(e))

    filename = f"feedback-{date.today().isoformat()}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
