"""Upload form served at ``GET /``."""

from __future__ import annotations

UPLOAD_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Lakebook to Markdown Converter</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background: #f4f5fb;
      min-height: 100vh;
      display: flex;
      align-items: center;
      justify-content: center;
      padding: 20px;
    }
    .container {
      background: white;
      border-radius: 12px;
      padding: 32px;
      max-width: 520px;
      width: 100%;
      box-shadow: 0 10px 40px rgba(0, 0, 0, 0.12);
    }
    h1 { color: #333; margin-bottom: 8px; font-size: 22px; }
    .subtitle { color: #666; margin-bottom: 24px; font-size: 14px; }
    fieldset { border: none; margin-bottom: 20px; }
    legend { font-weight: 600; margin-bottom: 8px; color: #333; }
    input[type="file"], input[type="url"] { width: 100%; padding: 8px; }
    .option { display: flex; gap: 8px; align-items: center; margin: 12px 0; }
    button {
      width: 100%;
      padding: 12px;
      background: #5a67d8;
      color: white;
      border: none;
      border-radius: 8px;
      font-size: 15px;
      cursor: pointer;
    }
    button:disabled { opacity: 0.6; cursor: not-allowed; }
    .error { color: #c0392b; margin-top: 16px; display: none; }
    .error.show { display: block; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Lakebook to Markdown</h1>
    <p class="subtitle">Convert a .lakebook export into a ZIP of Markdown files.</p>

    <form id="uploadForm" enctype="multipart/form-data">
      <fieldset>
        <legend>Archive</legend>
        <input type="file" name="lakebook" id="fileInput" accept=".lakebook">
        <div class="option">
          <input type="checkbox" id="downloadImages" name="downloadImages" value="true">
          <label for="downloadImages">Download images into the archive</label>
        </div>
        <button type="submit">Convert and download</button>
      </fieldset>
    </form>

    <form id="urlForm">
      <fieldset>
        <legend>Public page</legend>
        <input type="url" name="url" id="urlInput" placeholder="https://...">
        <div class="option">
          <input type="checkbox" id="urlDownloadImages">
          <label for="urlDownloadImages">Download images into the archive</label>
        </div>
        <button type="submit">Convert page</button>
      </fieldset>
    </form>

    <div class="error" id="error"></div>
  </div>

  <script>
    const error = document.getElementById('error');

    function filenameFrom(response, fallback) {
      const header = response.headers.get('Content-Disposition') || '';
      const match = /filename="([^"]+)"/.exec(header);
      return match ? match[1] : fallback;
    }

    async function download(response, fallback) {
      if (!response.ok) {
        const result = await response.json();
        throw new Error(result.error + (result.details ? ': ' + result.details : ''));
      }
      const blob = await response.blob();
      const url = URL.createObjectURL(blob);
      const a = document.createElement('a');
      a.href = url;
      a.download = filenameFrom(response, fallback);
      document.body.appendChild(a);
      a.click();
      document.body.removeChild(a);
      URL.revokeObjectURL(url);
    }

    async function submit(form, request, fallback) {
      error.classList.remove('show');
      const buttons = form.querySelectorAll('button');
      buttons.forEach(b => b.disabled = true);
      try {
        await download(await request(), fallback);
      } catch (err) {
        error.textContent = 'Error: ' + err.message;
        error.classList.add('show');
      } finally {
        buttons.forEach(b => b.disabled = false);
      }
    }

    document.getElementById('uploadForm').addEventListener('submit', (e) => {
      e.preventDefault();
      submit(e.target, () => fetch('/', { method: 'POST', body: new FormData(e.target) }), 'markdown-output.zip');
    });

    document.getElementById('urlForm').addEventListener('submit', (e) => {
      e.preventDefault();
      const payload = {
        url: document.getElementById('urlInput').value,
        download_images: document.getElementById('urlDownloadImages').checked,
      };
      submit(e.target, () => fetch('/api/convert/url', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify(payload),
      }), 'document.md');
    });
  </script>
</body>
</html>
"""
