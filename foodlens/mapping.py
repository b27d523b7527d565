from __future__ import annotations
"""
Mapping utilities to convert pipeline results into API responses.

Centralises the translation from internal dataclasses (PipelineResult /
ResolvedItem) into the Pydantic wire schemas (AnalysisResponse /
FoodItemOut), whose Portuguese field names are a client contract.
"""

from typing import List

from loguru import logger

from .config import AnalysisResponse, FoodItemOut
from .pipeline_types import PipelineResult, ResolvedItem


def to_api_item(item: ResolvedItem) -> FoodItemOut:
    return FoodItemOut(
        nome=item.name,
        caloriasPorPorcao=max(int(item.calories_per_portion), 0),
        porcaoDescricao=item.portion_description,
        confianca=min(max(float(item.confidence), 0.0), 1.0),
    )


def to_analysis_response(result: PipelineResult) -> AnalysisResponse:
    itens: List[FoodItemOut] = [to_api_item(item) for item in result.items]
    logger.info("Mapped {} items into API schema ({})", len(itens), result.status.value)
    return AnalysisResponse(itens=itens, mensagem=result.message)
