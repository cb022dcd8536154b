"""License storefront: catalogue search, cart and purchase orders against a license backend."""
