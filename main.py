"""CiteSearch - cited web answers

Simple CLI for answering one question.
"""

import argparse
import asyncio

from app.agents.orchestrator import SearchOrchestrator


async def run_search(query: str, model: str | None = None):
    """Run the search pipeline on the given question."""
    print(f"Question: {query}")
    print("-" * 50)

    orchestrator = SearchOrchestrator(model=model)
    response = await orchestrator.run(query)

    print("\n[*] Search queries used:")
    for i, sub_query in enumerate(response.search_queries_used, 1):
        print(f"  {i}. {sub_query}")

    print(f"\n{'='*50}")
    print("ANSWER:")
    print(f"{'='*50}")
    print(response.answer)

    if response.citations:
        print("\n[*] Citations:")
        for url in response.citations:
            print(f"  - {url}")


def main():
    parser = argparse.ArgumentParser(description="CiteSearch - cited web answers")
    parser.add_argument("--query", "-q", required=True, help="Question to answer")
    parser.add_argument("--model", "-m", help="Model to use (default: from config)")

    args = parser.parse_args()

    asyncio.run(run_search(args.query, args.model))


if __name__ == "__main__":
    main()
