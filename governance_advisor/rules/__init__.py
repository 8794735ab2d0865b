"""
Rule evaluators consumed by the recommendation engine.

Modules
-------
conditions     : evaluate_conditions() + evaluate_condition() — operator table.
actions        : action handlers (score, recommend, route, validate, notify,
                 set_variable) + apply_rule_actions().
engine         : RulesEngine — in-process evaluator over configured rules.
http_evaluator : HttpRuleEvaluator — async evaluator calling a rule service.
"""
