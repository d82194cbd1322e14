"""Steam trading limits, endpoints and pacing constants."""

STEAM_COMMUNITY_HOST = "steamcommunity.com"
STEAM_API_BASE = "https://api.steampowered.com/"

TRADEOFFER_BASE = "https://steamcommunity.com/tradeoffer/"
TRADEOFFER_NEW_URL = TRADEOFFER_BASE + "new"
TRADEOFFER_NEW_SEND_URL = TRADEOFFER_BASE + "new/send"

# Decided by Steam mainly for server stability with huge offers.
TRADE_MAX_ITEMS = 255

# Max trade offers to a single account.
TRADE_MAX_TRADES_PER_SINGLE_USER = 5

# Max total sent trade offers.
TRADE_MAX_ONGOING_TRADES = 30

# Standard delay, in milliseconds
STANDARD_DELAY_MS = 1000

MAX_HISTORICAL_CUTOFF = 2**32 - 1

DEFAULT_HISTORY_MAX_TRADES = 500

# Added to a 32-bit account id to obtain the individual 64-bit SteamID.
STEAMID64_BASE = 76561197960265728
