from contract_analyzer.analysis.analyzer import ContractAnalyzer
from contract_analyzer.analysis.factory import ContractAnalyzerFactory
from contract_analyzer.analysis.interpreter import ResponseInterpreter

__all__ = ["ContractAnalyzer", "ContractAnalyzerFactory", "ResponseInterpreter"]
