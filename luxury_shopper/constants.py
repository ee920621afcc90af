WELCOME_MESSAGE = "Welcome to The Luxury Shopper.<br> What are you looking for? say something like 'Gucci Tshirt' "

CONDITION_PROMPT = "Please specify the condition of the required item. (New, Used or None)"
MIN_PRICE_PROMPT = "Please specify the minimum price of the required item. (None in case you dont want to filter with minimum price)"
MAX_PRICE_PROMPT = "Please specify the maximum price of the required item. (None in case you dont want to filter with maximum price)"

# Answers meaning "do not filter on this slot", compared case-insensitively
NO_FILTER_SENTINELS = ("none", "all")

# Canonical condition labels accepted by the Condition item filter
CONDITION_LABELS = ("New", "Used")

SEARCH_AGAIN_SUFFIX = "What else would you like to search for?"
ZERO_RESULTS_MESSAGE = f"There are no items matching your criteria. <br> {SEARCH_AGAIN_SUFFIX} "
FETCH_ERROR_MESSAGE = f"Sorry, the search service is unavailable right now. Please try again.<br> {SEARCH_AGAIN_SUFFIX} "

# Highlight colour of links in rendered results
LINK_COLOR = "#c48843"

FINDING_OPERATION = "findItemsByKeywords"
FINDING_RESPONSE_KEY = "findItemsByKeywordsResponse"
