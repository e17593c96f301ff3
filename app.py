"""
Fantasy Football Assistant API
==============================
Serves Sleeper league data to the browser front-end:
- League info, rosters and users in one call
- Draft board with picks
- Player lookups and trending adds/drops
- Current NFL season state
"""

import logging

from fantasy_assistant.server import FantasyAssistant

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


if __name__ == "__main__":
    assistant = FantasyAssistant()
    assistant.run(debug=True)
