"""Payment return page.

After checkout the provider sends the browser here; the page shows the
outcome and, on a user tap, opens the native app through its deep link.
"""
