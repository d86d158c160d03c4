from functools import lru_cache

from flask import Flask, render_template, jsonify, abort

from charts import STYLES, figure_fragment
from loaders import load_summary_tables
from reshape import reshape_all
from services import ChartService

app = Flask(__name__)


@lru_cache(maxsize=1)
def load_tables():
    """Load and reshape the local workbook once per process."""
    return reshape_all(load_summary_tables())


def get_service():
    # Tests inject prepared tables through app.config
    tables = app.config.get('CHART_TABLES')
    if tables is None:
        tables = load_tables()
    return ChartService(tables)


@app.route('/')
def index():
    service = get_service()
    charts = [{'name': name, 'title': STYLES[name].title or name.replace('_', ' ').title()}
              for name in service.chart_names()]
    return render_template('index.html', charts=charts)


@app.route('/charts/<name>')
def chart(name):
    service = get_service()
    if not service.has_chart(name):
        abort(404)
    fig = service.get_figure(name)
    title = STYLES[name].title or name.replace('_', ' ').title()
    return render_template('chart.html', title=title, chart_html=figure_fragment(fig))


@app.route('/api/<name>')
def api_table(name):
    service = get_service()
    if not service.has_chart(name):
        abort(404)
    return jsonify(service.get_records(name))


if __name__ == '__main__':
    app.run(debug=True, port=5000)
