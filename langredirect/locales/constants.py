"""
langredirect/locales/constants.py
Static locale definitions.
Used when data/locales.json is missing or only overrides part of the tables.
Both the redirect script and the <noscript> fallback list are generated from
these, so a locale added here shows up in both.
"""

# ---------------------------------------------------------------------
# Locale used whenever the requested one is not supported
# ---------------------------------------------------------------------
DEFAULT_LOCALE = "en"

# ---------------------------------------------------------------------
# Browser codes that are published under a different path
# ---------------------------------------------------------------------
LOCALE_ALIASES = {
    "km": "km-ph",
}

# ---------------------------------------------------------------------
# Tutorial is only translated into these
# ---------------------------------------------------------------------
TUTORIAL_LOCALES = ["en", "de", "fr", "it", "es"]

# ---------------------------------------------------------------------
# Site locales: code -> native label shown in the fallback list
#   Key   = path segment on the site (https://<host>/<code>)
#   Value = product name in that language
# ---------------------------------------------------------------------
LOCALE_NAMES = {
    "ar":    "مصروفاتي",
    "bg":    "Моите разходи",
    "ca":    "Les Meves Despeses",
    "cs":    "Moje výdaje",
    "da":    "Mine udgifter",
    "de":    "Meine Ausgaben",
    "el":    "Έξοδα μου",
    "en":    "My Expenses",
    "es":    "Mis gastos",
    "eu":    "Nire gastuak",
    "fr":    "Mes dépenses",
    "hr":    "Moji troškovi",
    "hu":    "Kiadásaim",
    "it":    "Le mie spese",
    "iw":    "ההוצאות שלי",
    "ja":    "マイ エクスペンス",
    "km-ph": "Khmer",
    "kn":    "ಮೈ ಎಕ್ಸಪೆನ್ಸಸ್",
    "ko":    "내 지출",
    "ms":    "Perbelanjaan Saya",
    "nl":    "Mijn Uitgaven",
    "pl":    "Moje Wydatki",
    "pt":    "Minhas despesas",
    "ro":    "Cheltuielile Mele",
    "ru":    "Мои расходы",
    "ta":    "எனது செலவுகள்",
    "te":    "నా ఖర్చులు",
    "tr":    "Harcamalarım",
    "uk":    "Мої Витрати",
    "vi":    "Chi Tiêu Của Tôi",
    "zh-cn": "开支助手",
    "zh-tw": "開支助手",
}

SITE_LOCALES = list(LOCALE_NAMES.keys())

# ---------------------------------------------------------------------
# Fixed off-site destinations, independent of locale
# ---------------------------------------------------------------------
EXTERNAL_DESTINATIONS = {
    "paypal": "https://www.paypal.com/",
    "flattr": "https://flattr.com/thing/70123469956/My-Expenses-GPL-licenced-Android-Expense-Tracking-App",
    "news":   "https://plus.google.com/",
}

# ---------------------------------------------------------------------
# Legacy anchors that were renamed on the site
# ---------------------------------------------------------------------
FRAGMENT_ALIASES = {
    "#changelog": "#versionlist",
    "#privacy":   "#imprint",
}

TUTORIAL_FRAGMENTS = ["#tutorial", "#tutorial_class"]

TUTORIAL_PATH = "tutorial_class/introduction.html"
