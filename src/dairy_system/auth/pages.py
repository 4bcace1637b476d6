"""Inline HTML for the login page and the dashboard."""

LOGIN_PAGE = """<!doctype html>
<html lang="{{ culture }}">
<head>
  <meta charset="utf-8">
  <title>{{ t('app.title') }}</title>
  <style>
    body { font-family: sans-serif; background: #f4f6f8; display: flex; justify-content: center; padding-top: 10vh; }
    form { background: #fff; padding: 2rem; border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,.1); width: 320px; }
    label, input, button { display: block; width: 100%; margin-bottom: .75rem; box-sizing: border-box; }
    input { padding: .5rem; }
    button { padding: .6rem; background: #1f4e79; color: #fff; border: 0; border-radius: 4px; }
    .error { color: #b00020; }
    .cultures a { margin-right: .5rem; font-size: .85rem; }
  </style>
</head>
<body>
  <form method="post" action="{{ url_for('login') }}">
    <h2>{{ t('app.title') }}</h2>
    <h3>{{ t('login.heading') }}</h3>
    {% if error %}<p class="error">{{ error }}</p>{% endif %}
    {% if message %}<p>{{ message }}</p>{% endif %}
    <label for="username">{{ t('login.username') }}</label>
    <input id="username" name="username" autocomplete="username" required>
    <label for="password">{{ t('login.password') }}</label>
    <input id="password" name="password" type="password" autocomplete="current-password" required>
    <button type="submit">{{ t('login.submit') }}</button>
    <p class="cultures">
      <a href="/set-culture?culture=en">English</a>
      <a href="/set-culture?culture=hi">हिन्दी</a>
      <a href="/set-culture?culture=mr">मराठी</a>
    </p>
  </form>
</body>
</html>
"""

DASHBOARD_PAGE = """<!doctype html>
<html lang="{{ culture }}">
<head>
  <meta charset="utf-8">
  <title>{{ t('app.title') }}</title>
  <style>
    body { font-family: sans-serif; margin: 2rem; background: #f4f6f8; }
    header { display: flex; justify-content: space-between; align-items: center; }
    .cards { display: flex; gap: 1rem; margin-top: 1.5rem; }
    .card { background: #fff; padding: 1.25rem; border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,.1); min-width: 220px; }
    .value { font-size: 1.6rem; font-weight: bold; }
  </style>
</head>
<body>
  <header>
    <h2>{{ t('dashboard.welcome', name=name) }}</h2>
    <a href="{{ url_for('logout') }}">{{ t('nav.logout') }}</a>
  </header>
  {% if stats %}
  <div class="cards">
    <div class="card">
      <div>{{ t('dashboard.collections_today') }}</div>
      <div class="value">{{ '%.2f'|format(stats.collected_ltr) }} {{ t('dashboard.litres') }}</div>
      <div>{{ t('dashboard.amount') }}: {{ '%.2f'|format(stats.collected_amt) }}</div>
    </div>
    <div class="card">
      <div>{{ t('dashboard.sales_today') }}</div>
      <div class="value">{{ '%.2f'|format(stats.sold_ltr) }} {{ t('dashboard.litres') }}</div>
      <div>{{ t('dashboard.amount') }}: {{ '%.2f'|format(stats.sold_amt) }}</div>
    </div>
  </div>
  {% else %}
  <p>{{ t('dashboard.unavailable') }}</p>
  {% endif %}
  <h3>{{ t('dashboard.reports') }}</h3>
  <ul>
    <li><a href="/api/reports/collections.xlsx">collections.xlsx</a> | <a href="/api/reports/collections.pdf">collections.pdf</a></li>
    <li><a href="/api/reports/sales.xlsx">sales.xlsx</a> | <a href="/api/reports/sales.pdf">sales.pdf</a></li>
  </ul>
</body>
</html>
"""
