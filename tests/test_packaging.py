"""
Tests packaging — build_htaccess / resolve_primary_domain / build_archive / find_brand_assets
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import zipfile
import pytest

from affiliate_builder.assets import find_brand_assets
from affiliate_builder.core.schemas import Domain, HtaccessConfig
from affiliate_builder.packaging import build_archive, build_htaccess, resolve_primary_domain


# ── .htaccess ─────────────────────────────────────────────────────────────

class TestHtaccess:
    def test_ordre_des_sections(self):
        out = build_htaccess(HtaccessConfig(www_redirect="to-www"), "example.com")
        headers = ["# Force HTTPS", "# Redirect to www", "# Compression", "# Browser caching",
                   "# Security headers", "# Disable directory listing", "# Block sensitive files", "# Custom 404"]
        positions = [out.index(h) for h in headers]
        assert positions == sorted(positions)

    def test_flags_desactives(self):
        out = build_htaccess(HtaccessConfig(force_https=False, enable_gzip=False, enable_caching=False))
        assert "# Force HTTPS" not in out
        assert "mod_deflate" not in out
        assert "mod_expires" not in out
        assert "# Security headers" in out

    def test_sections_toujours_presentes(self):
        out = build_htaccess(HtaccessConfig())
        assert "Options -Indexes" in out
        assert "ErrorDocument 404 /index.html" in out
        assert 'X-Content-Type-Options "nosniff"' in out

    def test_regles_personnalisees_en_fin(self):
        out = build_htaccess(HtaccessConfig(custom_rules="  Redirect 301 /old /new \n"))
        assert out.endswith("# Custom rules\nRedirect 301 /old /new\n")

    def test_regles_blanches_ignorees(self):
        assert "# Custom rules" not in build_htaccess(HtaccessConfig(custom_rules="   "))

    def test_to_www_domaine(self):
        out = build_htaccess(HtaccessConfig(www_redirect="to-www"), "example.com")
        assert "RewriteCond %{HTTP_HOST} ^example\\.com$ [NC]" in out
        assert "RewriteRule ^(.*)$ https://www.example.com/$1 [L,R=301]" in out

    def test_to_non_www_domaine_www(self):
        out = build_htaccess(HtaccessConfig(www_redirect="to-non-www"), "www.example.com")
        assert "RewriteCond %{HTTP_HOST} ^www\\.example\\.com$ [NC]" in out
        assert "https://example.com/$1" in out

    def test_to_www_sans_domaine(self):
        out = build_htaccess(HtaccessConfig(www_redirect="to-www"))
        assert "!^www\\. [NC]" in out

    def test_none_pas_de_redirection(self):
        out = build_htaccess(HtaccessConfig(www_redirect="none"), "example.com")
        assert "Redirect to" not in out

    def test_deterministe(self):
        cfg = HtaccessConfig(www_redirect="to-non-www", custom_rules="Header set X-Test 1")
        assert build_htaccess(cfg, "a.com") == build_htaccess(cfg, "a.com")


class TestPrimaryDomain:
    def test_primaire(self):
        domains = [Domain(domain="a.com"), Domain(domain="b.com", is_primary=True)]
        assert resolve_primary_domain(domains) == "b.com"

    def test_premier(self):
        assert resolve_primary_domain([Domain(domain="a.com"), Domain(domain="b.com")]) == "a.com"

    def test_aucun(self):
        assert resolve_primary_domain([]) is None


# ── Archive ───────────────────────────────────────────────────────────────

class TestArchive:
    def test_contenu(self, tmp_path):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"\x89PNG")
        result = build_archive(tmp_path / "out" / "v1.zip", "<html></html>", "Options -Indexes\n", [logo])
        assert result.total_files == 3
        assert result.size_bytes == result.path.stat().st_size
        with zipfile.ZipFile(result.path) as zf:
            assert sorted(zf.namelist()) == [".htaccess", "assets/logo.png", "index.html"]
            assert zf.read("index.html").decode() == "<html></html>"
            assert zf.getinfo("index.html").compress_type == zipfile.ZIP_DEFLATED

    def test_atomique_en_cas_d_erreur(self, tmp_path):
        target = tmp_path / "v1.zip"
        with pytest.raises(FileNotFoundError):
            build_archive(target, "<html></html>", "", [tmp_path / "missing.png"])
        assert not target.exists()
        assert list(tmp_path.iterdir()) == []

    def test_ecrase_version_existante(self, tmp_path):
        target = tmp_path / "v1.zip"
        build_archive(target, "old", "")
        build_archive(target, "new", "")
        with zipfile.ZipFile(target) as zf:
            assert zf.read("index.html") == b"new"


# ── Assets ────────────────────────────────────────────────────────────────

class TestAssets:
    def test_dossier_absent(self, tmp_path):
        assets = find_brand_assets("p1", tmp_path)
        assert assets.logo is None and assets.favicon is None
        assert assets.files() == []

    def test_premier_par_ordre_alpha(self, tmp_path):
        d = tmp_path / "p1"
        d.mkdir()
        for name in ("logo.svg", "logo-dark.png", "favicon.ico", "banner.jpg"):
            (d / name).write_bytes(b"x")
        assets = find_brand_assets("p1", tmp_path)
        assert assets.logo.name == "logo-dark.png"
        assert assets.favicon_url == "assets/favicon.ico"
        assert len(assets.files()) == 2
