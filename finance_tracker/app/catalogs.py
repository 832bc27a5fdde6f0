from enum import Enum
from typing import Dict, Optional, Tuple, Union


class CategoryIcon(str, Enum):
    """Closed set of icons a category may carry."""

    UTENSILS = "Utensils"
    SHOPPING_CART = "ShoppingCart"
    SHOPPING_BAG = "ShoppingBag"
    CAR = "Car"
    HOME = "Home"
    HEART = "Heart"
    ZAP = "Zap"
    COFFEE = "Coffee"
    TV = "Tv"
    SMARTPHONE = "Smartphone"
    LAPTOP = "Laptop"
    BRIEFCASE = "Briefcase"
    GRADUATION_CAP = "GraduationCap"
    PLANE = "Plane"
    GIFT = "Gift"
    MUSIC = "Music"
    DUMBBELL = "Dumbbell"
    PIZZA = "Pizza"
    WINE = "Wine"
    TRENDING_UP = "TrendingUp"
    CREDIT_CARD = "CreditCard"
    WALLET = "Wallet"
    RECEIPT = "Receipt"
    TAG = "Tag"
    STAR = "Star"
    DOLLAR_SIGN = "DollarSign"
    SHIRT = "Shirt"
    GAMEPAD = "Gamepad"
    BOOK = "Book"
    CAMERA = "Camera"


# (label, emoji) per icon. Every CategoryIcon member has an entry.
CATEGORY_ICONS: Dict[CategoryIcon, Tuple[str, str]] = {
    CategoryIcon.UTENSILS: ("Food", "🍴"),
    CategoryIcon.SHOPPING_CART: ("Shopping", "🛒"),
    CategoryIcon.SHOPPING_BAG: ("Shopping Bag", "🛍️"),
    CategoryIcon.CAR: ("Transport", "🚗"),
    CategoryIcon.HOME: ("Home", "🏠"),
    CategoryIcon.HEART: ("Health", "❤️"),
    CategoryIcon.ZAP: ("Utilities", "⚡"),
    CategoryIcon.COFFEE: ("Coffee", "☕"),
    CategoryIcon.TV: ("Entertainment", "📺"),
    CategoryIcon.SMARTPHONE: ("Phone", "📱"),
    CategoryIcon.LAPTOP: ("Tech", "💻"),
    CategoryIcon.BRIEFCASE: ("Work", "💼"),
    CategoryIcon.GRADUATION_CAP: ("Education", "🎓"),
    CategoryIcon.PLANE: ("Travel", "✈️"),
    CategoryIcon.GIFT: ("Gift", "🎁"),
    CategoryIcon.MUSIC: ("Music", "🎵"),
    CategoryIcon.DUMBBELL: ("Fitness", "🏋️"),
    CategoryIcon.PIZZA: ("Pizza", "🍕"),
    CategoryIcon.WINE: ("Drinks", "🍷"),
    CategoryIcon.TRENDING_UP: ("Investment", "📈"),
    CategoryIcon.CREDIT_CARD: ("Card", "💳"),
    CategoryIcon.WALLET: ("Wallet", "👛"),
    CategoryIcon.RECEIPT: ("Receipt", "🧾"),
    CategoryIcon.TAG: ("Tag", "🏷️"),
    CategoryIcon.STAR: ("Star", "⭐"),
    CategoryIcon.DOLLAR_SIGN: ("Money", "💵"),
    CategoryIcon.SHIRT: ("Clothing", "👕"),
    CategoryIcon.GAMEPAD: ("Gaming", "🎮"),
    CategoryIcon.BOOK: ("Books", "📚"),
    CategoryIcon.CAMERA: ("Photos", "📷"),
}


def icon_label(icon: Union[CategoryIcon, str]) -> str:
    return CATEGORY_ICONS[CategoryIcon(icon)][0]


def icon_emoji(icon: Union[CategoryIcon, str]) -> str:
    return CATEGORY_ICONS[CategoryIcon(icon)][1]


def parse_icon(name: Optional[str]) -> Optional[CategoryIcon]:
    """
    Map an icon name from the API onto the catalog. Missing names give None;
    names outside the catalog raise ValueError.
    """
    if not name:
        return None
    return CategoryIcon(name)


class SourceType(str, Enum):
    BANK = "bank"
    FUND = "fund"
    LOAN = "loan"


SOURCE_TYPE_LABELS: Dict[SourceType, str] = {
    SourceType.BANK: "Bank Account",
    SourceType.FUND: "Fund Source",
    SourceType.LOAN: "Loan",
}

# Colors offered when creating a category.
PRESET_COLORS: Tuple[str, ...] = (
    "#ef4444",  # Red
    "#f97316",  # Orange
    "#eab308",  # Yellow
    "#22c55e",  # Green
    "#10b981",  # Emerald
    "#06b6d4",  # Cyan
    "#3b82f6",  # Blue
    "#6366f1",  # Indigo
    "#8b5cf6",  # Purple
    "#ec4899",  # Pink
    "#f43f5e",  # Rose
    "#64748b",  # Slate
)

# Palette for category breakdown charts, cycled by position.
CHART_COLORS: Tuple[str, ...] = (
    "#6366f1",
    "#8b5cf6",
    "#ec4899",
    "#f59e0b",
    "#06b6d4",
    "#10b981",
    "#f97316",
    "#a855f7",
)


def color_for_index(index: int) -> str:
    return CHART_COLORS[index % len(CHART_COLORS)]
