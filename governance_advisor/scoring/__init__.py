"""
Scoring subsystem.

Modules
-------
scorer       : compute_score() + score_question() + max_question_score()
               + determine_governance_level() — pure functions, no I/O.
completeness : compute_partial_score() + compute_completeness() for
               previews of unfinished questionnaires.
"""
