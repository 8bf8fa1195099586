"""
Génération du .htaccess (Apache) — assemblage texte déterministe.

Ordre fixe : HTTPS, redirection www, compression, cache, en-têtes de sécurité,
listing désactivé, fichiers sensibles, 404, règles personnalisées.
"""
from typing import Iterable, List, Optional

from ..core.schemas import Domain, HtaccessConfig

_FORCE_HTTPS = """# Force HTTPS
<IfModule mod_rewrite.c>
  RewriteEngine On
  RewriteCond %{HTTPS} off
  RewriteRule ^(.*)$ https://%{HTTP_HOST}%{REQUEST_URI} [L,R=301]
</IfModule>"""

_GZIP = """# Compression
<IfModule mod_deflate.c>
  AddOutputFilterByType DEFLATE text/html text/plain text/xml text/css
  AddOutputFilterByType DEFLATE application/javascript application/json application/xml
  AddOutputFilterByType DEFLATE image/svg+xml font/woff font/woff2
</IfModule>"""

_CACHING = """# Browser caching
<IfModule mod_expires.c>
  ExpiresActive On
  ExpiresDefault "access plus 1 month"
  ExpiresByType text/html "access plus 1 hour"
  ExpiresByType text/css "access plus 1 year"
  ExpiresByType application/javascript "access plus 1 year"
  ExpiresByType image/jpeg "access plus 1 year"
  ExpiresByType image/png "access plus 1 year"
  ExpiresByType image/webp "access plus 1 year"
  ExpiresByType image/svg+xml "access plus 1 year"
  ExpiresByType image/x-icon "access plus 1 year"
</IfModule>"""

_SECURITY_HEADERS = """# Security headers
<IfModule mod_headers.c>
  Header always set X-Content-Type-Options "nosniff"
  Header always set X-Frame-Options "SAMEORIGIN"
  Header always set X-XSS-Protection "1; mode=block"
  Header always set Referrer-Policy "strict-origin-when-cross-origin"
</IfModule>"""

_NO_INDEXES = """# Disable directory listing
Options -Indexes"""

_SENSITIVE_FILES = """# Block sensitive files
<FilesMatch "(^\\.|\\.(env|log|ini|bak|sql|sh)$)">
  Require all denied
</FilesMatch>"""

_ERROR_404 = """# Custom 404
ErrorDocument 404 /index.html"""


def resolve_primary_domain(domains: Iterable[Domain]) -> Optional[str]:
    """Domaine marqué primaire, sinon le premier, sinon None."""
    domains = list(domains)
    primary = next((d for d in domains if d.is_primary), None) or next(iter(domains), None)
    return primary.domain if primary else None


def _host_pattern(domain: Optional[str]) -> str:
    return domain.replace(".", "\\.") if domain else ""


def _www_redirect(mode: str, domain: Optional[str]) -> Optional[str]:
    bare = domain[4:] if domain and domain.startswith("www.") else domain
    if mode == "to-www":
        cond = f"^{_host_pattern(bare)}$ [NC]" if bare else "!^www\\. [NC]"
        target = f"https://www.{bare}" if bare else "https://www.%{HTTP_HOST}"
        return f"""# Redirect to www
<IfModule mod_rewrite.c>
  RewriteEngine On
  RewriteCond %{{HTTP_HOST}} {cond}
  RewriteRule ^(.*)$ {target}/$1 [L,R=301]
</IfModule>"""
    if mode == "to-non-www":
        if bare:
            cond, target = f"^www\\.{_host_pattern(bare)}$ [NC]", f"https://{bare}"
        else:
            cond, target = "^www\\.(.+)$ [NC]", "https://%1"
        return f"""# Redirect to non-www
<IfModule mod_rewrite.c>
  RewriteEngine On
  RewriteCond %{{HTTP_HOST}} {cond}
  RewriteRule ^(.*)$ {target}/$1 [L,R=301]
</IfModule>"""
    return None


def build_htaccess(config: HtaccessConfig, primary_domain: Optional[str] = None) -> str:
    sections: List[str] = []

    if config.force_https:
        sections.append(_FORCE_HTTPS)

    redirect = _www_redirect(config.www_redirect, primary_domain)
    if redirect:
        sections.append(redirect)

    if config.enable_gzip:
        sections.append(_GZIP)
    if config.enable_caching:
        sections.append(_CACHING)

    sections.append(_SECURITY_HEADERS)
    sections.append(_NO_INDEXES)
    sections.append(_SENSITIVE_FILES)
    sections.append(_ERROR_404)

    custom = (config.custom_rules or "").strip()
    if custom:
        sections.append(f"# Custom rules\n{custom}")

    return "\n\n".join(sections) + "\n"
