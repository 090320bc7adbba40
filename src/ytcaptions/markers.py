"""Fixed textual markers and URL templates for the video platform.

The platform publishes no schema for its watch page, so page handling
relies on literal substrings. They are collected here so they can be
updated without touching the extraction or handshake logic.
"""

import re

DEFAULT_HOST = "youtube.com"

WATCH_URL = "https://{host}/watch?hl={lang}&persist_hl=1&v={video_id}"

# Consent interstitial
CONSENT_FORM = 'action="https://consent.youtube.com/s"'
CONSENT_TOKEN_PATTERN = re.compile(r'name="v" value="(.*?)"')
CONSENT_COOKIE = "CONSENT=YES+{token};Domain=.{host}"

# Embedded caption manifest
MANIFEST_START = '"captions":'
MANIFEST_END = ',"videoDetails'

# Page classification
CAPTCHA_WIDGET = 'class="g-recaptcha"'
PLAYABILITY_STATUS = '"playabilityStatus":'

# Caption track query parameters
FORMAT_PARAM = "&fmt={format}"
TRANSLATION_PARAM = "&tlang={lang}"
