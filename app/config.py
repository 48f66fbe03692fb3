# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()  # Load from .env file in project root

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_VERIFY_SSL = os.getenv("API_VERIFY_SSL", "true").lower() in ("true", "1", "yes")
_API_TOKEN = os.getenv("API_TOKEN", None)

# Storage
_DATA_DIR = os.getenv("KOSADMIN_DATA_DIR", None)
_LOGS_DIR = os.getenv("KOSADMIN_LOGS_DIR", None)

# Wizard persistence
_FORM_PERSISTENCE_VERSION = os.getenv("FORM_PERSISTENCE_VERSION", "1.0")
_FORM_EXPIRATION_HOURS = float(os.getenv("FORM_EXPIRATION_HOURS", "24"))
_WIZARD_PERSIST_DEBOUNCE_MS = int(os.getenv("WIZARD_PERSIST_DEBOUNCE_MS", "300"))

_DEFAULT_LANGUAGE = os.getenv("KOSADMIN_LANGUAGE", "id")

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
_LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() in ("true", "1", "yes")

_PROJECT_ROOT = Path(__file__).parent.parent


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Kos Admin"
    APP_TITLE: str = "Kos Property Management"
    VERSION: str = "1.0.0"

    # HTTP API Backend Settings
    # Reads from .env file (API_BASE_URL, API_TIMEOUT, API_VERIFY_SSL, API_TOKEN)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT
    API_VERIFY_SSL: bool = _API_VERIFY_SSL
    API_TOKEN: str = _API_TOKEN

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    DATA_DIR: Path = Path(_DATA_DIR) if _DATA_DIR else _PROJECT_ROOT / "data"
    LOGS_DIR: Path = Path(_LOGS_DIR) if _LOGS_DIR else _PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_LEVEL: str = _LOG_LEVEL
    LOG_TO_FILE: bool = _LOG_TO_FILE

    # Form persistence
    # Session storage lives as long as the application process, local storage
    # is a JSON file under DATA_DIR.
    LOCAL_STORAGE_FILE: str = "form_storage.json"
    LOCAL_STORAGE_PATH: Path = DATA_DIR / LOCAL_STORAGE_FILE
    FORM_PERSISTENCE_VERSION: str = _FORM_PERSISTENCE_VERSION
    FORM_EXPIRATION_HOURS: float = _FORM_EXPIRATION_HOURS

    # Wizard
    WIZARD_PERSIST_DEBOUNCE_MS: int = _WIZARD_PERSIST_DEBOUNCE_MS

    # i18n
    DEFAULT_LANGUAGE: str = _DEFAULT_LANGUAGE
    SUPPORTED_LANGUAGES: tuple = ("id", "en")


# Controlled vocabularies
class Vocabularies:
    # Facility catalogue: (id, name)
    PROPERTY_FACILITIES = [
        ("kasur", "Kasur / Spring bed"),
        ("lemari", "Lemari pakaian"),
        ("meja_belajar", "Meja belajar & kursi"),
        ("kamar_mandi", "Kamar mandi dalam / luar"),
        ("ac_kipas", "AC / Kipas angin"),
        ("wifi", "WiFi / Internet"),
        ("dapur_bersama", "Dapur bersama"),
        ("laundry", "Laundry (mesin cuci bersama / jasa laundry)"),
        ("ruang_tamu", "Ruang tamu / ruang santai"),
        ("area_jemur", "Area jemur pakaian"),
        ("air_bersih", "Air bersih (sumur bor / PDAM)"),
        ("listrik", "Listrik sudah termasuk / token sendiri"),
        ("cctv_keamanan", "CCTV & keamanan 24 jam"),
    ]

    PARKING_FACILITIES = [
        ("parkir_motor", "Parkir motor"),
        ("parkir_mobil", "Parkir mobil"),
        ("parkir_sepeda", "Parkir sepeda"),
        ("parkir_bersama", "Parkir bersama (terbuka, tanpa sekat)"),
        ("parkir_tertutup", "Parkir tertutup / indoor (ada atap)"),
        ("parkir_terbatas", "Parkir terbatas (hanya motor atau hanya untuk penghuni tertentu)"),
        ("parkir_luas", "Parkir luas (bisa untuk tamu juga)"),
        ("parkir_kartu", "Akses parkir dengan kartu/kunci (gate/portal)"),
        ("parkir_cctv", "Parkir dengan CCTV atau satpam"),
    ]

    PROPERTY_RULES = [
        ("jam_malam", "Jam malam (misalnya maksimal jam 11 malam)"),
        ("tamu_dilarang_menginap", "Tamu dilarang menginap"),
        ("tamu_lawan_jenis_dilarang", "Tamu lawan jenis dilarang masuk kamar"),
        ("tamu_ruang_tamu_saja", "Tamu hanya boleh di ruang tamu / area bersama"),
        ("dilarang_hewan", "Dilarang membawa hewan peliharaan"),
        ("dilarang_merokok_kamar", "Dilarang merokok di dalam kamar"),
        ("dilarang_merokok_bersama", "Dilarang merokok di area bersama"),
        ("jaga_kebersihan", "Menjaga kebersihan kamar dan area bersama"),
        ("tidak_merusak_fasilitas", "Tidak boleh merusak fasilitas kos"),
        ("bayar_tepat_waktu", "Wajib bayar kos tepat waktu"),
        ("tidak_bising", "Tidak boleh bising/berisik setelah jam tertentu"),
        ("parkir_sesuai_area", "Parkir sesuai area yang ditentukan"),
        ("dilarang_alkohol_narkoba", "Dilarang membawa atau mengonsumsi alkohol/narkoba"),
        ("dilarang_memasak_kamar", "Dilarang memasak di dalam kamar"),
    ]

    # Fallback entries used when the facilities step submits empty lists
    DEFAULT_FACILITY = ("basic_facility", "Fasilitas Dasar")
    DEFAULT_RULE = ("basic_rule", "Peraturan Dasar")

    # Deposit percentage codes accepted by the rooms API
    DEPOSIT_PERCENTAGES = (
        "10_PERCENT",
        "20_PERCENT",
        "30_PERCENT",
        "40_PERCENT",
        "50_PERCENT",
    )

    @classmethod
    def lookup(cls, catalogue: list) -> dict:
        """Return an id -> name mapping for a catalogue."""
        return {code: name for code, name in catalogue}
