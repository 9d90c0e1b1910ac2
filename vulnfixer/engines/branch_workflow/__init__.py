"""Branch workflow engine: one isolated branch and pull request per fix."""

from vulnfixer.engines.branch_workflow.git import GitManager
from vulnfixer.engines.branch_workflow.workflow import BranchWorkflow, FixOutcome

__all__ = ["BranchWorkflow", "FixOutcome", "GitManager"]
