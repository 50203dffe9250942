"""Basic usage example of the Allora inference agent.

Requires OPENAI_API_KEY and UPSHOT_API_KEY (and optionally ALLORA_API_KEY)
in the environment or a .env file.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from allora_k import AlloraAgentApp


async def main() -> None:
    """Main example function."""
    print("=" * 80)
    print("Allora Network Inference Agent - Basic Example")
    print("=" * 80)
    print()

    app = AlloraAgentApp()
    app.initialize()

    print("Available models:")
    for model in app.list_available_models():
        print(f"  - {model}")
    print()

    print("-" * 80)
    print("Allora Network topics")
    print("-" * 80)
    try:
        print(await app.describe_topics())
    except Exception as e:
        print(f"Error: {e}")
        return

    prompts = [
        "What is the predicted ETH price in 5 minutes?",
        "What is the predicted price of gold in 24 hours?",
    ]
    for prompt in prompts:
        print("-" * 80)
        print(f"User: {prompt}")
        outcome = await app.handle_message(prompt)
        for reply in outcome.replies:
            print(f"Agent: {reply}")
        print(f"(handled: {outcome.handled})")
        print()


if __name__ == "__main__":
    asyncio.run(main())
