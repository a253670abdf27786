"""DOM locators shared by the UI tests.

Selectors are deliberately broad: the tests must work against whatever
markup the storefront ships, so each one lists the common variants.
"""

MAIN_NAVIGATION = "nav:visible, header:visible"
BODY = "body"
FOOTER = "footer"

ANY_LINK = "a[href]"
SITE_LINK = 'a[href^="/"]'

LOGIN_BUTTON = (
    'button:has-text("Login"), button:has-text("Sign In"), '
    'a:has-text("Login"), a:has-text("Sign In")'
)
LOGIN_LINK = 'a[href*="login"], a[href*="signin"]'
LOGIN_ENTRY = 'button:has-text("Login"), a:has-text("Login"), a[href*="login"]'
LOGOUT_BUTTON = 'button:has-text("Logout"), button:has-text("Sign Out"), a:has-text("Logout")'

USERNAME_INPUT = (
    'input[name="username"], input[name="email"], input[type="email"], '
    'input[placeholder*="email" i], input[placeholder*="username" i]'
)
PASSWORD_INPUT = 'input[type="password"]'
LOGIN_SUBMIT = 'button[type="submit"], button:has-text("Login"), button:has-text("Sign In")'
VALIDATION_MESSAGE = '[class*="error"], [class*="alert"], [role="alert"]'

CATALOG_LINK = 'a[href*="catalog"], a:has-text("Catalog"), a:has-text("Products")'
PRODUCT_ELEMENT = '[class*="product"], [class*="item"], [class*="card"]'
PRODUCT_ENTRY = '[class*="product"], [class*="item"]'
SEARCH_INPUT = 'input[type="search"], input[placeholder*="search" i], input[placeholder*="filter" i]'
