"""
User-facing text for the catalog chat flow.
"""

# ─────────────────────────────────────────────
# Catalog
# ─────────────────────────────────────────────
PAGE_HEADER = "Page {page} of {page_count} ( {total} items )"
NO_RESULTS = "There are no results matching your search."
NO_FURTHER_ITEMS = "There are no further items to show."
PLEASE_MAKE_A_SELECTION = "Please make a selection."
TYPE_WHAT_DO_YOU_WANT_TO_DO = "Type what do you want to do."

# ─────────────────────────────────────────────
# Basket
# ─────────────────────────────────────────────
HOW_MANY_DO_YOU_WANT_TO_BUY = "How many {product_name} do you want to buy?"
PLEASE_TYPE_A_NUMBER = "Please type a number."
YOU_HAVE_ADDED_TO_YOUR_BASKET = "You have added {product_name} to your basket."
LOGIN_REQUIRED = "You need to log in before adding items to your basket."

# ─────────────────────────────────────────────
# Failures
# ─────────────────────────────────────────────
SOMETHING_WENT_WRONG = "Sorry, something went wrong. Please try again."

# ─────────────────────────────────────────────
# Buttons
# ─────────────────────────────────────────────
HOME_BUTTON = "Home"
LOGIN_BUTTON = "Log in"
SHOW_MORE_BUTTON = "Show more"
ADD_TO_CART_BUTTON = "Add to cart"
