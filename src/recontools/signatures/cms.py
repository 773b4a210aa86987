"""CMS fingerprints.

Each CMS is one candidate of the ``cms`` category. Path fragments
(``/wp-content/``) are body substrings and live in ``html``.
"""

CMS_SIGNATURES: dict[str, dict[str, dict[str, list[str]]]] = {
    "cms": {
        "wordpress": {
            "meta": [
                '<meta name="generator" content="WordPress',
                '<link rel="https://api.w.org/"',
            ],
            "html": ["/wp-content/", "/wp-includes/", "/wp-admin/"],
            "scripts": ["wp-embed.min.js", "wp-emoji-release.min.js"],
            "headers": ["wp-json", "x-pingback"],
        },
        "drupal": {
            "meta": [
                '<meta name="generator" content="Drupal',
                "jQuery.extend(Drupal.settings",
            ],
            "html": ["/sites/default/", "/sites/all/"],
            "scripts": ["drupal.js", "drupal.min.js"],
            "headers": ["x-drupal-cache", "x-drupal-dynamic-cache"],
        },
        "joomla": {
            "meta": ['<meta name="generator" content="Joomla!'],
            "html": ["/templates/", "/media/jui/", "/components/com_"],
            "scripts": ["mootools.js", "media/jui/js/jquery.min.js"],
        },
        "shopify": {
            "meta": ["cdn.shopify.com", "Shopify.theme"],
            "html": ["/cdn/shop/products/", "/cdn/shop/files/"],
            "scripts": ["shopify.js", "shopify.min.js"],
            "headers": ["x-shopid", "x-shopify-stage"],
        },
        "wix": {
            "html": ["/_api/", "/_partials/", "static.wixstatic.com"],
            "scripts": ["wix-code.js", "wix-stores.js"],
            "headers": ["x-wix-published-version", "x-wix-application-instance"],
        },
        "ghost": {
            "meta": ['<meta name="generator" content="Ghost'],
            "html": ["/ghost/api/", "/content/images/"],
            "headers": ["x-ghost-cache-status"],
        },
        "squarespace": {
            "meta": ["<!-- This is Squarespace. -->"],
            "html": ["static1.squarespace.com", "Static.SQUARESPACE_CONTEXT"],
            "headers": ["x-servedby"],
        },
    },
}
