from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field

from core.feature_store import FeatureStore

logger = logging.getLogger("features_server")

app = FastAPI(title="Weather Station Features API")
store = FeatureStore()


# Request bodies; geometry sent by clients is ignored
class FeatureProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    station: str = Field(default="", alias="Automatic Weather Station")
    air_temperature: float = Field(default=0.0, alias="Air Temperature")


class FeatureBody(BaseModel):
    type: str = "Feature"
    properties: FeatureProperties = Field(default_factory=FeatureProperties)


def _get_or_404(feature_id: str):
    feature = store.get(feature_id)
    if feature is None:
        raise HTTPException(status_code=404, detail="Feature not found")
    return feature


@app.get("/api/features")
def get_features():
    return store.collection()


@app.get("/api/features/{feature_id}")
def get_feature(feature_id: str):
    return _get_or_404(feature_id).to_geojson()


@app.post("/api/features")
def create_feature(body: FeatureBody):
    feature = store.create(body.properties.station, body.properties.air_temperature)
    logger.info(f"Created feature {feature.id} ({feature.station})")
    return feature.to_geojson()


@app.put("/api/features/{feature_id}")
def update_feature(feature_id: str, body: FeatureBody):
    updated = store.update(feature_id, body.properties.station, body.properties.air_temperature)
    if updated is None:
        raise HTTPException(status_code=404, detail="Feature not found")
    return updated.to_geojson()


@app.delete("/api/features/{feature_id}", status_code=204)
def delete_feature(feature_id: str):
    if not store.delete(feature_id):
        raise HTTPException(status_code=404, detail="Feature not found")
    logger.info(f"Deleted feature {feature_id}")
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn
    from config import FEATURES_API_PORT, LOG_FORMAT, LOG_LEVEL
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    uvicorn.run(app, host="0.0.0.0", port=FEATURES_API_PORT)
