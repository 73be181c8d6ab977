"""Business process test DSL for the HERA universal schema.

The `hera_testing` package validates and resolves YAML business process
test documents and checks recorded business data with pure oracles.

Key features:
- schema validation reporting every issue of a document at once;
- `{{...}}` template resolution against a run-scoped context;
- ordered action resolution for an external runner;
- accounting, inventory, workflow, tax, smart code, tenant isolation
  and domain workflow oracles.
"""
