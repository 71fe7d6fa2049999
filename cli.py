from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from crisis_assistant.api_client import OrganizationApiClient
from crisis_assistant.config import Settings
from crisis_assistant.conversation import ConversationAgent
from crisis_assistant.llm import GeminiChatClient
from crisis_assistant.models import Charity, Classification, ConversationContext, Message
from crisis_assistant.organizations import OrganizationRepository, normalize_search_term
from crisis_assistant.rag_api import RagApiClient
from crisis_assistant.ranking import ranking_explanation
from crisis_assistant.types import NonprofitRecord


def _split_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _print_message(message: Message) -> None:
    print("\nAssistant>")
    print(message.content)
    for idx, reply in enumerate(message.quick_replies, start=1):
        print(f"  ({idx}) {reply}")
    if message.sources:
        print("\nSources:")
        for idx, source in enumerate(message.sources, start=1):
            print(f"[{idx}] {source['title']} - {source['url']}")


def _print_organizations(organizations: List[Charity], search_term: Optional[str] = None) -> None:
    if not organizations:
        print("No organizations found.")
        return
    for idx, org in enumerate(organizations, start=1):
        print(f"{idx:>2}. {org.name} ({org.slug}) | trust={org.trust_score} | {', '.join(org.countries)}")
        if search_term:
            record: NonprofitRecord = {"slug": org.slug, "name": org.name, "description": org.description}
            print(f"    {ranking_explanation(record, search_term, idx)}")


def _read_article(path: Optional[str]) -> Optional[str]:
    """Read article text from a file path, if given."""
    if not path:
        return None
    file_path = Path(path).expanduser().resolve()
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")
    return file_path.read_text(encoding="utf-8", errors="ignore").strip()


def _build_reasoning_client(args: argparse.Namespace, settings: Settings):
    if args.backend == "gemini":
        api_key = args.api_key or os.getenv("GEMINI_API_KEY", "")
        return GeminiChatClient(
            api_key=api_key,
            model_name=settings.gemini_model_name,
            max_retries=settings.gemini_max_retries,
            retry_wait_seconds=settings.gemini_retry_wait_seconds,
            temperature=settings.gemini_temperature,
            max_output_tokens=settings.gemini_max_output_tokens,
        )
    return RagApiClient(
        settings.api_base_url,
        max_retries=settings.chat_max_retries,
        backoff_seconds=settings.chat_retry_backoff_seconds,
        timeout=settings.request_timeout_seconds,
    )


async def _matched_charities(settings: Settings, cause: str) -> List[Charity]:
    """Pick organizations for the session from the live search (or fallback)."""
    api = OrganizationApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)
    try:
        repository = OrganizationRepository(api)
        organizations = await repository.fetch()
    finally:
        await api.aclose()
    matched = [org for org in organizations if cause in org.causes]
    return (matched or organizations)[:3]


async def _run_chat(args: argparse.Namespace, settings: Settings) -> int:
    try:
        article_text = _read_article(args.article_file)
        client = _build_reasoning_client(args, settings)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    classification = Classification(
        cause=args.cause,
        geo_name=args.geo,
        severity=args.severity,
        identified_needs=_split_list(args.needs),
        affected_groups=_split_list(args.groups),
    )
    context = ConversationContext(
        classification=classification,
        matched_charities=await _matched_charities(settings, args.cause),
        article_summary=args.summary,
        article_text=article_text,
        article_title=args.title,
    )
    agent = ConversationAgent(
        context,
        client,
        enable_web_search=args.web_search or settings.enable_web_search,
        history_limit=settings.chat_history_limit,
    )

    _print_message(agent.record_greeting())
    print("\nType 'exit' or 'quit' to stop.")
    try:
        while True:
            try:
                question = (await asyncio.to_thread(input, "\nYou> ")).strip()
            except EOFError:
                print("\nExiting chat.")
                break

            if not question:
                continue
            if question.lower() in {"exit", "quit"}:
                print("Exiting chat.")
                break

            _print_message(await agent.process_message(question))
    finally:
        aclose = getattr(client, "aclose", None)
        if aclose is not None:
            await aclose()
    return 0


def command_chat(args: argparse.Namespace, settings: Settings) -> int:
    """Start an interactive conversation about a crisis."""
    return asyncio.run(_run_chat(args, settings))


async def _run_orgs(args: argparse.Namespace, settings: Settings) -> int:
    api = OrganizationApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)
    try:
        repository = OrganizationRepository(api)
        if args.refetch:
            organizations = await repository.refetch(args.term)
        else:
            organizations = await repository.fetch(args.term)
    finally:
        await api.aclose()

    if repository.error:
        print(f"Warning: organization search failed ({repository.error}); showing vetted fallback list.")
        _print_organizations(organizations)
    else:
        _print_organizations(organizations, normalize_search_term(args.term))
    return 0


def command_orgs(args: argparse.Namespace, settings: Settings) -> int:
    """Search organizations and print them ranked."""
    return asyncio.run(_run_orgs(args, settings))


async def _run_org(args: argparse.Namespace, settings: Settings) -> int:
    api = OrganizationApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)
    try:
        organization = await OrganizationRepository(api).fetch_one(args.slug)
    finally:
        await api.aclose()

    if organization is None:
        print(f"Organization not found: {args.slug}", file=sys.stderr)
        return 1
    print(organization.name)
    print(f"Slug: {organization.slug}")
    print(f"Trust score: {organization.trust_score}")
    print(f"Causes: {', '.join(organization.causes)}")
    print(f"Countries: {', '.join(organization.countries)}")
    if organization.website_url:
        print(f"Website: {organization.website_url}")
    print(f"\n{organization.description}")
    return 0


def command_org(args: argparse.Namespace, settings: Settings) -> int:
    """Show one organization by slug."""
    return asyncio.run(_run_org(args, settings))


async def _run_health(settings: Settings) -> bool:
    client = RagApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)
    try:
        return await client.check_health()
    finally:
        await client.aclose()


def command_health(_: argparse.Namespace, settings: Settings) -> int:
    """Check whether the chat service answers its health endpoint."""
    healthy = asyncio.run(_run_health(settings))
    print(f"Chat service at {settings.api_base_url}: {'healthy' if healthy else 'unavailable'}")
    return 0 if healthy else 1


def build_arg_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(description="Crisis assistant CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    chat_parser = subparsers.add_parser("chat", help="Chat with the assistant about a crisis")
    chat_parser.add_argument("--cause", required=True, help="Cause category, e.g. disaster_relief")
    chat_parser.add_argument("--geo", required=True, help="Location name, e.g. Valencia")
    chat_parser.add_argument("--severity", default="unknown", help="Severity level")
    chat_parser.add_argument("--summary", default="", help="Short article summary")
    chat_parser.add_argument("--title", default=None, help="Article title")
    chat_parser.add_argument("--article-file", default=None, help="Path to a .txt file with the article text")
    chat_parser.add_argument("--needs", default="", help="Comma-separated identified needs")
    chat_parser.add_argument("--groups", default="", help="Comma-separated affected groups")
    chat_parser.add_argument("--web-search", action="store_true", help="Let the backend search the web")
    chat_parser.add_argument(
        "--backend",
        choices=("api", "gemini"),
        default="api",
        help="Answer through the chat API or directly with Gemini",
    )
    chat_parser.add_argument("--api-key", default="", help="Gemini API key (overrides GEMINI_API_KEY)")

    orgs_parser = subparsers.add_parser("orgs", help="Search organizations")
    orgs_parser.add_argument("term", nargs="?", default=None, help="Optional search term")
    orgs_parser.add_argument("--refetch", action="store_true", help="Bypass the cache for this term")

    org_parser = subparsers.add_parser("org", help="Show one organization")
    org_parser.add_argument("slug", help="Organization slug")

    subparsers.add_parser("health", help="Check chat service health")
    return parser


def main() -> int:
    """CLI entrypoint."""
    load_dotenv()
    settings = Settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    parser = build_arg_parser()
    args = parser.parse_args()

    if args.command == "chat":
        return command_chat(args, settings)
    if args.command == "orgs":
        return command_orgs(args, settings)
    if args.command == "org":
        return command_org(args, settings)
    if args.command == "health":
        return command_health(args, settings)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
