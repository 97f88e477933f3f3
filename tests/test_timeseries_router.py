import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from market_dashboard.routers import timeseries as timeseries_router

SAMPLES = [
    {"time": "09:30", "price": 10.00, "volume": 800, "avg_price": 10.00},
    {"time": "09:31", "price": 10.05, "volume": 12345, "avgPrice": 10.00},
    {"time": "09:32", "price": 9.98, "volume": 300, "avg_price": 10.00},
]


def _app() -> FastAPI:
    app = FastAPI()
    app.include_router(timeseries_router.router)
    return app


@pytest.mark.asyncio
async def test_timeseries_chart():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post(
            '/chart/timeseries',
            json={'samples': SAMPLES, 'preClose': 10.0, 'stockName': '平安银行', 'stockCode': '000001'},
        )
    assert response.status_code == 200
    body = response.json()
    assert body['kind'] == 'chart'
    assert body['price_domain']['min'] == pytest.approx(9.945)
    assert body['price_domain']['max'] == pytest.approx(10.055)
    assert [s['classification']['vs_previous'] for s in body['samples']] == ['equal', 'above', 'below']
    assert body['header']['title'] == '平安银行 [000001]'
    assert body['summary']['latest_volume'] == 300


@pytest.mark.asyncio
async def test_timeseries_empty():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post('/chart/timeseries', json={'samples': [], 'pre_close': 10.0})
    assert response.status_code == 200
    assert response.json()['kind'] == 'empty'


@pytest.mark.asyncio
async def test_timeseries_rejects_zero_reference():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post('/chart/timeseries', json={'samples': SAMPLES, 'pre_close': 0})
    assert response.status_code == 422
    assert 'reference price' in response.json()['detail']


@pytest.mark.asyncio
async def test_timeseries_rejects_bad_sample():
    bad = [{"time": "09:30", "price": -1, "volume": 10, "avg_price": 10.0}]
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post('/chart/timeseries', json={'samples': bad, 'pre_close': 10.0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_tooltip():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post(
            '/chart/timeseries/tooltip',
            json={'samples': SAMPLES, 'pre_close': 10.0, 'index': 1, 'session_date': '2024-01-02'},
        )
    assert response.status_code == 200
    body = response.json()
    assert body['title'] == '2024-01-02 09:31'
    assert [line['text'] for line in body['lines']] == ['10.05  +0.05 (+0.50%)', '10.00', '1.23万']


@pytest.mark.asyncio
async def test_tooltip_out_of_range():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        response = await client.post('/chart/timeseries/tooltip', json={'samples': SAMPLES, 'pre_close': 10.0, 'index': 9})
        empty = await client.post('/chart/timeseries/tooltip', json={'samples': [], 'pre_close': 10.0, 'index': 0})
    assert response.status_code == 404
    assert empty.status_code == 404
