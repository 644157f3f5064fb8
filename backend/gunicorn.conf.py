# Application (factory call, resolved from the backend/ directory)
wsgi_app = "taskapi:create_app()"

# Bind & workers
bind = "0.0.0.0:8000"
workers = 2  # override with env GUNICORN_WORKERS
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # app log level comes from LOG_LEVEL

# Trust proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
