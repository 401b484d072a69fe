"""Store orders API: records storefront orders in a JSON document on GitHub."""
