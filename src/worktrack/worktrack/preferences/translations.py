from __future__ import annotations

from .model import Language

# Navigation and page titles only; page bodies are English.
TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.EN: {
        "dashboard": "Dashboard",
        "attendance": "Attendance",
        "leaves": "Leave",
        "leave_requests": "Leave Requests",
        "tasks": "Tasks",
        "settings": "Settings",
        "logout": "Logout",
        "appearance": "Appearance",
        "language": "Language",
        "profile_settings": "Profile Settings",
        "update_profile": "Update Profile",
        "theme_light": "Light",
        "theme_dark": "Dark",
        "theme_system": "System",
    },
    Language.AR: {
        "dashboard": "لوحة التحكم",
        "attendance": "الحضور",
        "leaves": "الإجازات",
        "leave_requests": "طلبات الإجازة",
        "tasks": "المهام",
        "settings": "الإعدادات",
        "logout": "تسجيل الخروج",
        "appearance": "المظهر",
        "language": "اللغة",
        "profile_settings": "إعدادات الملف الشخصي",
        "update_profile": "تحديث الملف الشخصي",
        "theme_light": "فاتح",
        "theme_dark": "داكن",
        "theme_system": "النظام",
    },
}


def translator(language: Language):
    table = TRANSLATIONS[language]
    fallback = TRANSLATIONS[Language.EN]

    def t(key: str) -> str:
        return table.get(key) or fallback.get(key) or key

    return t
