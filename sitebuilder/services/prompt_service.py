# FILE: sitebuilder/services/prompt_service.py

from __future__ import annotations

from typing import Dict, List

from sitebuilder.services.generation_types import GenerationRequest

MARKUP_ONLY_SYSTEM_PROMPT = """You are an expert web developer who creates beautiful, modern websites.
Based on the user's description, generate detailed HTML/CSS code for a complete webpage.
Include modern design elements, proper styling, responsive layout, and semantic HTML.
Make it visually stunning with gradients, animations, and modern UI patterns.
Return ONLY the complete HTML code with inline CSS, ready to render.
Do NOT wrap the answer in JSON, markdown fences or any commentary."""

FULL_STACK_SYSTEM_PROMPT = """You are an expert full-stack web developer. Generate complete, production-ready code based on the user's request.

For the FRONTEND, provide:
- Complete HTML with modern, responsive design
- Inline CSS and JavaScript
- Beautiful, professional UI

For the BACKEND (if requested), provide:
- Database schema (PostgreSQL format)
- Serverless function code
- API endpoints and authentication logic

Return a single JSON object and nothing else, with this structure:
{
  "html": "complete HTML code",
  "hasBackend": true,
  "backendCode": "serverless function code or null",
  "databaseSchema": "SQL schema or null",
  "edgeFunctions": [{"name": "function-name", "description": "what it does"}]
}

If no backend is needed, just return the HTML in the html field with hasBackend: false."""


def build_system_prompt(include_backend: bool) -> str:
    return FULL_STACK_SYSTEM_PROMPT if include_backend else MARKUP_ONLY_SYSTEM_PROMPT


def build_messages(request: GenerationRequest) -> List[Dict[str, str]]:
    """One system message, one user message carrying the prompt verbatim."""
    return [
        {"role": "system", "content": build_system_prompt(request.include_backend)},
        {"role": "user", "content": request.prompt},
    ]
