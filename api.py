from __future__ import annotations

import os
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from javadeps.config import AnalyzerConfig
from javadeps.model import DependencyGraph
from javadeps.pipeline import analyze_repository
from javadeps.summarize import render_graph


app = FastAPI(title="Java Dependency Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str
	project_package: str = ""
	include_reverse: bool = True
	resolve_references: bool = True


class AnalyzeResponse(BaseModel):
	root: str
	files_found: int
	files_parsed: int
	failed_files: List[str]
	graph: DependencyGraph
	report: str


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")

	config = AnalyzerConfig(
		project_package=req.project_package,
		include_reverse=req.include_reverse,
		resolve_references=req.resolve_references,
	)
	result = analyze_repository(root, config)
	return AnalyzeResponse(
		root=result.root,
		files_found=result.files_found,
		files_parsed=result.files_parsed,
		failed_files=result.failed_files,
		graph=result.graph,
		report=render_graph(result.graph),
	)
