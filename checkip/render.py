import logging

from jinja2 import Environment, TemplateError

logger = logging.getLogger(__name__)

RESPONSE_HTML = (
    "<html><head><title></title></head><body>"
    "{% for item in items %}<div>{{ item }}</div>{% endfor %}"
    "</body></html>"
)

_env = Environment()


def _load_template(source: str = RESPONSE_HTML):
    try:
        return _env.from_string(source)
    except TemplateError as e:
        logger.error(f"Failed to parse template: {e}")
        return None


_template = _load_template()


def fallback_response(ip: str) -> str:
    return (
        "<html><head><title></title></head><body>"
        f"<div>Current IP Address: {ip}</div><div>Time Zone: NA</div><div>Location: NA</div>"
        "</body></html>"
    )


def invalid_ip_response(ip: str) -> str:
    return f"<html><head><title></title></head><body>Invalid IP: {ip}</body></html>"


def generate_response(ip: str, timezone: str, location: str, template=None) -> str:
    """Generate the html page returned to the client."""
    template = template or _template
    if template is None:
        return fallback_response(ip)

    items = [
        f"Current IP Address: {ip}",
        f"Time Zone: {timezone}",
        f"Location: {location}",
    ]
    try:
        return template.render(items=items)
    except TemplateError as e:
        logger.error(f"Failed to execute html template: {e}")
        return fallback_response(ip)
