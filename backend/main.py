"""SnipeRank API – FastAPI app serving AI visibility reports."""

from anthropic import Anthropic
from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

import settings
from ai_service import analyze_url, build_llm_client
from models import FRIENDLY_PROFILE, FULL_PROFILE, ReportProfile
from scraper import normalize_target_url
from schemas import (
    AnalysisReportResponse,
    AnalyzerStatusResponse,
    ReportRequest,
    ReportRequestResponse,
    SendLinkRequest,
    SendLinkResponse,
)

app = FastAPI(
    title="SnipeRank API",
    description="AI SEO visibility scoring",
    version="3.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_llm_client() -> Anthropic | None:
    """Claude client for the current request; None when no key is configured."""
    return build_llm_client()


def _run_report(url: str | None, profile: ReportProfile, client: Anthropic | None) -> AnalysisReportResponse:
    if not url or not url.strip():
        raise HTTPException(status_code=400, detail="Missing URL parameter")
    target = normalize_target_url(url)
    if target is None:
        raise HTTPException(status_code=400, detail="Invalid URL parameter")

    report = analyze_url(target, client, profile)
    return AnalysisReportResponse(**report)


@app.get("/api/full", response_model=AnalysisReportResponse)
def full_report(
    url: str | None = None,
    client: Anthropic | None = Depends(get_llm_client),
) -> AnalysisReportResponse:
    """
    Comprehensive report: 10 strengths, 25 issues, 5 engine insights.
    Always 200 with a renderable body once the URL is valid.
    """
    return _run_report(url, FULL_PROFILE, client)


@app.head("/api/full")
def full_report_probe() -> Response:
    return Response(status_code=200)


@app.get("/api/full/status", response_model=AnalyzerStatusResponse)
def full_report_status() -> AnalyzerStatusResponse:
    """Report whether the analysis credentials are configured."""
    return AnalyzerStatusResponse(
        ok=True,
        has_api_key=bool(settings.get_anthropic_api_key()),
        has_page_speed_key=bool(settings.get_pagespeed_api_key()),
        model=FULL_PROFILE.model,
    )


@app.get("/api/friendly", response_model=AnalysisReportResponse)
def friendly_report(
    url: str | None = None,
    client: Anthropic | None = Depends(get_llm_client),
) -> AnalysisReportResponse:
    """Lighter report: 5 strengths, 10 issues, 5 engine insights."""
    return _run_report(url, FRIENDLY_PROFILE, client)


@app.post("/api/send-report-request", response_model=ReportRequestResponse)
def send_report_request(body: ReportRequest) -> ReportRequestResponse:
    """Record a full-report request. Email delivery is not wired up."""
    print(f"REPORT REQUEST: name={body.name} email={body.email} phone={body.phone}")
    return ReportRequestResponse(message="Report request received. Email logic is currently mocked.")


@app.post("/api/send-link", response_model=SendLinkResponse)
def send_link(body: SendLinkRequest) -> SendLinkResponse:
    """Record a report-link request from the results page."""
    print(
        f"REPORT LINK REQUEST: name={body.name} email={body.email} url={body.url} "
        f"company={body.company or '-'} phone={body.phone or '-'} message={body.message or '-'}"
    )
    return SendLinkResponse(success=True)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
