from __future__ import annotations

from typing import Optional

DEFAULT_CULTURE = "en"
SUPPORTED_CULTURES = ("en", "hi", "mr")

MESSAGES: dict[str, dict[str, str]] = {
    "app.title": {
        "en": "Dairy Management",
        "hi": "डेयरी प्रबंधन",
        "mr": "दुग्ध व्यवस्थापन",
    },
    "login.heading": {
        "en": "Sign in",
        "hi": "साइन इन करें",
        "mr": "साइन इन करा",
    },
    "login.username": {"en": "Username", "hi": "उपयोगकर्ता नाम", "mr": "वापरकर्ता नाव"},
    "login.password": {"en": "Password", "hi": "पासवर्ड", "mr": "पासवर्ड"},
    "login.submit": {"en": "Login", "hi": "लॉगिन", "mr": "लॉगिन"},
    "login.invalid": {
        "en": "Invalid username or password",
        "hi": "गलत उपयोगकर्ता नाम या पासवर्ड",
        "mr": "चुकीचे वापरकर्ता नाव किंवा पासवर्ड",
    },
    "login.success": {"en": "Login successful", "hi": "लॉगिन सफल", "mr": "लॉगिन यशस्वी"},
    "logout.done": {"en": "You have been logged out", "hi": "आप लॉग आउट हो गए हैं", "mr": "तुम्ही लॉग आउट झाला आहात"},
    "dashboard.welcome": {"en": "Welcome, {name}", "hi": "स्वागत है, {name}", "mr": "स्वागत आहे, {name}"},
    "dashboard.collections_today": {
        "en": "Milk collected today",
        "hi": "आज का दूध संकलन",
        "mr": "आजचे दूध संकलन",
    },
    "dashboard.sales_today": {"en": "Milk sold today", "hi": "आज की दूध बिक्री", "mr": "आजची दूध विक्री"},
    "dashboard.litres": {"en": "litres", "hi": "लीटर", "mr": "लिटर"},
    "dashboard.amount": {"en": "Amount", "hi": "राशि", "mr": "रक्कम"},
    "dashboard.unavailable": {
        "en": "Figures are unavailable right now",
        "hi": "आंकड़े अभी उपलब्ध नहीं हैं",
        "mr": "आकडेवारी सध्या उपलब्ध नाही",
    },
    "dashboard.reports": {"en": "Reports", "hi": "रिपोर्ट", "mr": "अहवाल"},
    "nav.logout": {"en": "Logout", "hi": "लॉग आउट", "mr": "लॉग आउट"},
    "error.unauthorized": {
        "en": "Authentication required",
        "hi": "प्रमाणीकरण आवश्यक है",
        "mr": "प्रमाणीकरण आवश्यक आहे",
    },
    "error.not_found": {"en": "Not found", "hi": "नहीं मिला", "mr": "सापडले नाही"},
    "error.internal": {
        "en": "Internal Server Error",
        "hi": "आंतरिक सर्वर त्रुटि",
        "mr": "अंतर्गत सर्व्हर त्रुटी",
    },
}


def normalize_culture(value: Optional[str]) -> Optional[str]:
    """Map 'hi-IN', 'MR_in', 'en' ... onto a supported culture, or None."""
    if not value:
        return None
    lang = value.strip().replace("_", "-").split("-")[0].lower()
    return lang if lang in SUPPORTED_CULTURES else None


def translate(key: str, culture: Optional[str] = None, **kwargs) -> str:
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    text = entry.get(culture or DEFAULT_CULTURE) or entry[DEFAULT_CULTURE]
    return text.format(**kwargs) if kwargs else text
