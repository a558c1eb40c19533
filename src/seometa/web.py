from __future__ import annotations

import argparse
import json
from textwrap import dedent
from typing import Any, Dict

from flask import Flask, Response, jsonify, request

from .normalize import EXAMPLE_INPUT, FIELD_KEYS, normalize_record
from .render import render_all, standalone_html
from .share import build_token, load_share


def _payload() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        return {}
    return payload


INDEX_HTML = dedent(
    """
    <!doctype html>
    <html lang="en">
    <head>
      <meta charset="utf-8" />
      <meta name="viewport" content="width=device-width, initial-scale=1" />
      <title>SEO Meta Generator</title>
      <style>
        :root { --bg:#0c0d0f; --fg:#e8e8ea; --muted:#a7a7ad; --card:#15171a; --acc:#4f7cff; --warn:#f59e0b; }
        * { box-sizing: border-box; }
        body { margin:0; font: 14px/1.45 system-ui, -apple-system, Segoe UI, Roboto, sans-serif; background: var(--bg); color: var(--fg); }
        header { padding: 16px 24px; border-bottom: 1px solid #1b1d21; display:flex; justify-content: space-between; align-items:center; gap:16px; }
        header h1 { margin: 0; font-size: 16px; letter-spacing: 0.3px; }
        main { max-width: 1180px; margin: 0 auto; padding: 28px 24px 40px; display:grid; gap:20px; grid-template-columns: 340px minmax(0, 1fr); align-items:start; }
        .card { background: var(--card); border:1px solid #202328; border-radius: 12px; padding:18px; }
        .stack { display:flex; flex-direction:column; gap:6px; margin-bottom:12px; }
        .row { display:flex; gap:8px; flex-wrap:wrap; }
        label { font-size:12px; color: var(--muted); text-transform: uppercase; letter-spacing:0.6px; display:flex; justify-content:space-between; }
        input, textarea { width:100%; padding: 10px 12px; border-radius: 8px; border:1px solid #23262b; background: #11131a; color: var(--fg); font: inherit; }
        textarea { resize: vertical; min-height: 72px; }
        button { padding: 10px 14px; border-radius: 8px; border:1px solid transparent; background: var(--acc); color: #fff; cursor: pointer; font-weight:600; }
        button.secondary { background:#1d2025; color:var(--fg); border-color:#2a2d31; }
        pre { background:#0f1114; border:1px solid #23262b; border-radius:10px; padding:14px; overflow:auto; max-height:380px; white-space:pre-wrap; }
        .muted { color: var(--muted); }
        .small { font-size:12px; }
        #status { min-height: 18px; color: var(--warn); }
        @media (max-width: 900px) { main { grid-template-columns: minmax(0,1fr); } }
      </style>
    </head>
    <body>
      <header>
        <h1>SEO Meta Generator</h1>
        <div class="muted small">Meta tags, Open Graph, Twitter cards, JSON-LD, robots.txt and sitemap.xml</div>
      </header>
      <main>
        <form id="seoForm" class="card" autocomplete="off">
          <div class="stack"><label for="title">Title <span data-count-for="title">0</span></label><input id="title" name="title" /></div>
          <div class="stack"><label for="description">Description <span data-count-for="description">0</span></label><textarea id="description" name="description"></textarea></div>
          <div class="stack"><label for="canonical">Canonical URL</label><input id="canonical" name="canonical" type="url" placeholder="https://example.com/" /></div>
          <div class="stack"><label for="siteName">Site name</label><input id="siteName" name="siteName" /></div>
          <div class="stack"><label for="ogImage">Social image URL</label><input id="ogImage" name="ogImage" type="url" /></div>
          <div class="stack"><label for="twitter">Twitter handle</label><input id="twitter" name="twitter" placeholder="@handle" /></div>
          <div class="stack"><label for="themeColor">Theme color</label><input id="themeColor" name="themeColor" placeholder="#0b1020" /></div>
          <div class="stack"><label for="lang">Language</label><input id="lang" name="lang" placeholder="en" /></div>
          <div class="row">
            <button type="button" id="btnExample" class="secondary">Example</button>
            <button type="button" id="btnReset" class="secondary">Reset</button>
          </div>
        </form>
        <section class="card">
          <div class="row">
            <button type="button" id="btnCopy">Copy head</button>
            <button type="button" id="btnDownload" class="secondary">Download template.html</button>
            <button type="button" id="btnShare" class="secondary">Share link</button>
          </div>
          <div id="status" class="small"></div>
          <h2 class="muted small">&lt;head&gt;</h2>
          <pre id="output"></pre>
          <h2 class="muted small">robots.txt</h2>
          <pre id="robotsOut"></pre>
          <h2 class="muted small">sitemap.xml</h2>
          <pre id="sitemapOut"></pre>
        </section>
      </main>
      <script>
      const $ = (id) => document.getElementById(id);
      const FIELDS = __FIELDS__;
      const EXAMPLE = __EXAMPLE__;
      const form = $('seoForm');
      let lastToken = '';
      let renderSeq = 0;

      function setStatus(msg) { $('status').textContent = msg; }
      function formData() {
        const data = {};
        for (const key of FIELDS) data[key] = $(key).value;
        return data;
      }
      function fill(values) {
        for (const key of FIELDS) $(key).value = values[key] || '';
      }
      async function post(path, body) {
        const res = await fetch(path, { method: 'POST', headers: { 'Content-Type': 'application/json' }, body: JSON.stringify(body) });
        if (!res.ok) throw new Error('Request failed: ' + res.status);
        return res;
      }
      async function render() {
        const seq = ++renderSeq;
        try {
          const data = await (await post('/api/generate', formData())).json();
          if (seq !== renderSeq) return;
          $('output').textContent = data.head;
          $('robotsOut').textContent = data.robots;
          $('sitemapOut').textContent = data.sitemap;
          lastToken = data.token;
          for (const key of ['title', 'description']) {
            document.querySelector('[data-count-for="' + key + '"]').textContent = String($(key).value.length);
          }
          setStatus(data.warnings.join(' '));
        } catch (err) {
          if (seq === renderSeq) setStatus(err.message);
        }
      }
      async function copyText(text) {
        try { await navigator.clipboard.writeText(text); return true; }
        catch {
          const ta = document.createElement('textarea');
          ta.value = text;
          ta.setAttribute('readonly', '');
          ta.style.position = 'absolute';
          ta.style.left = '-9999px';
          document.body.appendChild(ta);
          ta.select();
          let ok = false;
          try { ok = document.execCommand('copy'); } catch { ok = false; }
          document.body.removeChild(ta);
          return ok;
        }
      }
      async function loadFromHash() {
        const hash = String(window.location.hash || '').replace(/^#/, '');
        if (!hash.startsWith('config=')) return false;
        try {
          const data = await (await post('/api/decode', { config: hash })).json();
          if (!data.record) return false;
          fill(data.record);
          return true;
        } catch { return false; }
      }

      form.addEventListener('input', render);
      $('btnCopy').addEventListener('click', async () => {
        const ok = await copyText($('output').textContent);
        setStatus(ok ? 'Copied to clipboard.' : 'Copy failed.');
      });
      $('btnDownload').addEventListener('click', async () => {
        try {
          const blob = await (await post('/api/template', formData())).blob();
          const a = document.createElement('a');
          a.href = URL.createObjectURL(blob);
          a.download = 'template.html';
          a.click();
          URL.revokeObjectURL(a.href);
        } catch (err) { setStatus(err.message); }
      });
      $('btnShare').addEventListener('click', async () => {
        await render();
        window.location.hash = 'config=' + lastToken;
        const ok = await copyText(window.location.href);
        setStatus(ok ? 'Share URL copied.' : 'Share URL created.');
      });
      $('btnExample').addEventListener('click', () => { fill(EXAMPLE); render(); });
      $('btnReset').addEventListener('click', () => {
        window.location.hash = '';
        setStatus('');
        requestAnimationFrame(render);
      });
      loadFromHash().then((loaded) => { if (!loaded) fill(EXAMPLE); render(); });
      </script>
    </body>
    </html>
    """
).strip()


def create_app() -> Flask:
    app = Flask(__name__)

    @app.get("/")
    def index() -> Response:
        html = INDEX_HTML.replace("__FIELDS__", json.dumps(list(FIELD_KEYS))).replace(
            "__EXAMPLE__", json.dumps(EXAMPLE_INPUT)
        )
        return Response(html, mimetype="text/html")

    @app.post("/api/generate")
    def api_generate():
        try:
            record = normalize_record(_payload())
            artifacts = render_all(record)
            return jsonify(
                {
                    "record": record.to_dict(),
                    "head": artifacts.head,
                    "robots": artifacts.robots,
                    "sitemap": artifacts.sitemap,
                    "warnings": artifacts.warnings,
                    "token": build_token(record),
                }
            )
        except Exception as e:
            app.logger.exception("Failed to generate artifacts")
            return jsonify({"error": str(e)}), 500

    @app.post("/api/decode")
    def api_decode():
        payload = _payload()
        value = payload.get("config")
        if isinstance(value, str) and "config=" not in value:
            value = f"config={value}"
        try:
            record = load_share(value)
        except Exception as e:
            app.logger.exception("Failed to decode shared configuration")
            return jsonify({"error": str(e)}), 500
        if record is None:
            app.logger.info("No usable shared configuration in request")
            return jsonify({"record": None})
        return jsonify({"record": record.to_dict()})

    @app.post("/api/template")
    def api_template():
        try:
            html = standalone_html(normalize_record(_payload()))
        except Exception as e:
            app.logger.exception("Failed to build template")
            return jsonify({"error": str(e)}), 500
        return Response(
            html,
            mimetype="text/html",
            headers={"Content-Disposition": 'attachment; filename="template.html"'},
        )

    return app


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the SEO meta generator web UI")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5173)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
