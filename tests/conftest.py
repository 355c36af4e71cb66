"""Pytest configuration and fixtures for nginx-route-check tests."""

import pytest


@pytest.fixture
def sample_nginx_conf():
    """Multi-server configuration wrapped in an http block."""
    return '''user www-data;
worker_processes auto;

events {
    worker_connections 768;
}

http {
    include /etc/nginx/mime.types;

    server {
        listen 80 default_server;
        server_name example.com www.example.com;
        root /var/www/html;
        index index.html index.htm;

        location / {
            try_files $uri $uri/ =404;
        }

        location = /favicon.ico {
            access_log off;
        }

        location /images/ {
            root /var/www/static;
        }

        location ^~ /static/ {
            expires 30d;
        }

        location ~* \\.(png|jpg)$ {
            expires 7d;
        }

        location ~ ^/api/v[0-9]+/ {
            proxy_pass http://127.0.0.1:8000;
        }
    }

    server {
        listen 80;
        server_name *.example.com;
        root /var/www/wildcard;

        location / {
            return 404;
        }
    }

    server {
        listen 80;
        server_name ~^api\\d+\\.example\\.org$;

        location /v1/ {
            proxy_pass http://127.0.0.1:9000;
        }
    }
}
'''


@pytest.fixture
def serverless_nginx_conf():
    """Configuration snippet with locations but no server block."""
    return '''root /srv;
index index.php;

location / {
    try_files $uri /index.php;
}

location ~ \\.php$ {
    fastcgi_pass unix:/run/php/php8.2-fpm.sock;
}
'''
