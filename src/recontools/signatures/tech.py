"""Technology stack fingerprints, grouped by category."""

TECH_SIGNATURES: dict[str, dict[str, dict[str, list[str]]]] = {
    "frameworks": {
        "react": {
            "scripts": ["react.", "react-dom."],
            "html": ["data-reactroot", "data-reactid", "_reactRootContainer"],
        },
        "vue": {
            "scripts": ["vue.", "nuxt"],
            "html": ["data-v-", "__vue__", "__NUXT__"],
        },
        "angular": {
            "scripts": ["angular."],
            "html": ["ng-version", "ng-app", "ng-controller"],
        },
        "next.js": {
            "scripts": ["/_next/static/"],
            "html": ["__NEXT_DATA__"],
            "headers": ["x-nextjs-cache"],
        },
        "jquery": {
            "scripts": ["jquery."],
            "html": ["jquery"],
        },
    },
    "analytics": {
        "google-analytics": {
            "scripts": ["google-analytics.com", "ga.js", "gtag"],
            "html": ["GoogleAnalyticsObject", "ga(", "gtag("],
        },
        "google-tag-manager": {
            "scripts": ["googletagmanager.com"],
            "html": ["google_tag_manager", "GTM-"],
        },
        "hotjar": {
            "scripts": ["static.hotjar.com"],
            "html": ["hjSiteSettings"],
        },
    },
    "cdn": {
        "cloudflare": {
            "headers": ["cf-ray", "cf-cache-status"],
            "html": ["cloudflare"],
        },
        "akamai": {
            "headers": ["x-akamai-transformed", "akamai-origin-hop"],
        },
        "fastly": {
            "headers": ["fastly-io-info", "x-fastly"],
        },
        "amazon-cloudfront": {
            "headers": ["x-amz-cf-id", "x-amz-cf-pop"],
        },
    },
    "security": {
        "security-headers": {
            "headers": [
                "content-security-policy",
                "x-frame-options",
                "x-xss-protection",
                "x-content-type-options",
                "strict-transport-security",
            ],
        },
        "recaptcha": {
            "scripts": ["google.com/recaptcha"],
            "html": ["grecaptcha", "g-recaptcha"],
        },
    },
    "server": {
        "nginx": {
            "headers": ["nginx", "x-nginx"],
        },
        "apache": {
            "headers": ["apache"],
        },
        "iis": {
            "headers": ["microsoft-iis", "x-aspnet-version"],
        },
        "litespeed": {
            "headers": ["litespeed"],
        },
    },
    "languages": {
        "php": {
            "headers": ["php"],
            "html": [".php"],
        },
        "asp.net": {
            "headers": ["asp.net"],
            "html": ["__VIEWSTATE"],
        },
    },
    "advertising": {
        "google-ads": {
            "scripts": ["pagead2.googlesyndication.com", "adsbygoogle"],
            "html": ["adsbygoogle"],
        },
        "facebook-pixel": {
            "scripts": ["connect.facebook.net/en_US/fbevents.js"],
            "html": ["fbq("],
        },
    },
    "ecommerce": {
        "woocommerce": {
            "scripts": ["woocommerce"],
            "html": ["woocommerce", "wc_"],
        },
        "shopify": {
            "scripts": ["shopify"],
            "html": ["Shopify."],
        },
        "magento": {
            "scripts": ["magento"],
            "html": ["Mage."],
        },
    },
}
