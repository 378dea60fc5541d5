"""Configuración del bot de carreras"""

# Página de listado
TARGET_URL = "https://carreraspanama.com/"
LISTING_SELECTOR = "#eventos2 > div > div > div > div > div.col-lg-4.col-md-6 > div"
INFO_SELECTOR = "#informacion"

# Canal de pago que dispara la notificación
PAYMENT_CHANNEL = "PAGAR CON YAPPY"

# Email
EMAIL_SUBJECT = "[Carreras] {date} Inscripciones disponibles con {channel}"
SENDER_NAME = "Bot de Carreras"
SMTP_HOST = "smtp.gmail.com"
SMTP_PORT = 465

# Playwright
LISTING_TIMEOUT_MS = 10_000
NAVIGATION_TIMEOUT_MS = 30_000
BLOCKED_RESOURCE_TYPES = ["image", "stylesheet", "font"]
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Concurrencia y programación
MAX_CONCURRENT_PAGES = 3
CHECK_INTERVAL_MINUTES = 15

# Reintentos
MAX_RETRIES = 2
RETRY_DELAY_SEC = 5

# Salidas
OUTPUT_FILE = "carreras_panama_eventos.json"
RUN_LOG_PATH = "usage_log.csv"
DEBUG_HTML_PATH = "debug_page.html"

# Textos por defecto
NO_TITLE = "Sin título"
NO_DATE = "Fecha no disponible"
NO_PRICE = "N/A"

# Clasificación de disponibilidad
REGISTRATIONS_MARKER = "Inscripciones:"
PRICE_PREFIX = "Precio"
SOLD_OUT_LABEL = "Agotados"
AVAILABLE_LABEL = "Disponibles"
UNKNOWN_LABEL = "Desconocido"
ERROR_LABEL = "Error"
SOLD_OUT_KEYWORDS = ["agotado", "agotados", "sold out"]
AVAILABLE_KEYWORDS = ["disponible", "disponibles"]
