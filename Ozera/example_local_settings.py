# Copy to local_settings.py and adjust; local_settings.py is not committed.

SECRET_KEY = ''

# DEBUG is read from DJANGO_DEBUG=1 so the browser-reload middleware gets wired in

ALLOWED_HOSTS = ['*']

# Number the WhatsApp order summary is sent to (country code, digits only)
WHATSAPP_ORDER_PHONE = "201271772724"

# For production use PostgreSQL:
# DATABASES = {
#     'default': {
#         'ENGINE': 'django.db.backends.postgresql',
#         'NAME': '',
#         'USER': '',
#         'PASSWORD': '',
#         'HOST': 'localhost',
#         'PORT': '5432',
#     },
# }

LOG_LEVEL = "DEBUG"
