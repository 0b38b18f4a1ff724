"""Referral links and social share messages."""

from urllib.parse import parse_qs, urlsplit

from waitlyst.settings import settings

REF_PARAM = "ref"

# {product} and {link} are replaced in every template
SHARE_TEMPLATES = {
    "twitter": "I just joined the {product} waitlist. Something big is coming.\n\n{link}",
    "linkedin": "Excited to join the {product} waitlist! Can't wait to see what they're building.\n\n{link}",
    "whatsapp": (
        "Hey! I just signed up for {product}. Looks really promising, "
        "thought you'd want in too: {link}"
    ),
    "email_subject": "You're invited: {product} waitlist",
    "email_body": (
        "Hey,\n\nI just joined the {product} waitlist and thought you'd be interested. "
        "They're building something pretty exciting.\n\n"
        "Here's my invite link: {link}\n\nSee you there!"
    ),
}


def build_referral_link(code: str, base_url: str | None = None) -> str:
    """Link that credits ``code`` when a friend signs up through it."""
    base_url = base_url if base_url is not None else settings.base_url
    return f"{base_url}?{REF_PARAM}={code}"


def parse_referral_code(url: str) -> str | None:
    """Extract the ``ref`` query parameter from a landing URL.

    Returns:
        The referral code, or None when the URL carries none
    """
    values = parse_qs(urlsplit(url).query).get(REF_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


def share_messages(link: str, product_name: str | None = None) -> dict[str, str]:
    """Render every share template for a referral link."""
    product = product_name or settings.product_name
    return {
        channel: template.replace("{product}", product).replace("{link}", link)
        for channel, template in SHARE_TEMPLATES.items()
    }
