"""Action execution pipeline: resolve, authorize, validate, execute, report."""

from __future__ import annotations

import contextlib
from collections.abc import Generator, Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, SessionTransaction

from sqla_panel._audit import log_action_failure, log_action_outcome
from sqla_panel._context import PanelContext
from sqla_panel.actions._action import Action
from sqla_panel.actions._context import ActionContext
from sqla_panel.actions._result import ActionResult
from sqla_panel.exceptions import (
    ActionExecutionError,
    ActionValidationError,
    ConfigurationError,
    RecordNotFoundError,
)
from sqla_panel.registry._registry import ResourceRegistry, get_default_registry
from sqla_panel.resource._resource import Resource

__all__ = ["ActionPipeline", "load_records", "run_action"]


def load_records(
    session: Session,
    model: type,
    ids: Iterable[Any],
    *,
    pk: str = "id",
) -> list[Any]:
    """Load the records for *ids* in the order the ids were given.

    Args:
        session: Session to query with.
        model: Mapped class to load.
        ids: Primary key values, in selection order.
        pk: Name of the primary key attribute on *model*.

    Raises:
        RecordNotFoundError: If any id has no matching row.

    Example::

        posts = load_records(session, Post, [3, 1, 2])
        [p.id for p in posts]  # [3, 1, 2]
    """
    requested = list(ids)
    if not requested:
        return []
    column = getattr(model, pk)
    rows = session.execute(select(model).where(column.in_(requested))).scalars().all()
    by_id = {str(getattr(row, pk)): row for row in rows}

    ordered: list[Any] = []
    for record_id in requested:
        found = by_id.get(str(record_id))
        if found is None:
            raise RecordNotFoundError(model=model.__name__, id=record_id)
        ordered.append(found)
    return ordered


@contextlib.contextmanager
def _owned_transaction(session: Session) -> Generator[None, None, None]:
    try:
        yield
    except BaseException:
        session.rollback()
        raise
    session.commit()


def _transaction(
    session: Session, owned: bool
) -> SessionTransaction | contextlib.AbstractContextManager[None]:
    # The caller's transaction is bounded by a SAVEPOINT and left open;
    # a transaction the pipeline started is committed here.
    if owned:
        return _owned_transaction(session)
    return session.begin_nested()


class ActionPipeline:
    """Runs actions against a selected record set.

    Each invocation moves through a fixed sequence, never backwards:

    1. **Resolve** the resource by slug and the action by slug.
    2. **Authorize** with the action's predicate. Denied invocations
       open no transaction and run no handler.
    3. **Validate** the selection and the submitted field values.
    4. **Execute** the handler inside one transaction boundary. Any
       exception rolls the whole boundary back; no record in the batch
       keeps a partial mutation.
    5. **Report** an :class:`ActionResult`, or raise
       :class:`~sqla_panel.exceptions.ActionExecutionError` wrapping the
       handler's exception. Failures are never retried.

    Confirmation is a client concern: the pipeline assumes the caller
    already obtained it and only carries the text in ``Action.to_dict()``.

    Args:
        registry: Registry used to resolve resource slugs and handed to
            handlers for cross-resource lookups. Defaults to the global
            registry.

    Example::

        pipeline = ActionPipeline(registry)
        result = pipeline.run(
            "products",
            "delete-selected",
            ids=[1, 2, 3],
            session=session,
            context=PanelContext(actor=current_user),
        )
        if result.ok:
            print(result.message)
    """

    def __init__(self, registry: ResourceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else get_default_registry()

    def run(
        self,
        resource: str | Resource,
        action: str | Action[Any],
        *,
        session: Session | None,
        context: PanelContext | None = None,
        records: Sequence[Any] | None = None,
        ids: Iterable[Any] | None = None,
        fields: Mapping[str, Any] | None = None,
        request: Any = None,
        pk: str = "id",
    ) -> ActionResult:
        """Run one action invocation.

        Args:
            resource: Resource slug or instance.
            action: Action slug (looked up among the resource's actions for
                *context*) or an :class:`Action` instance.
            session: Session providing the transaction. Required.
            context: Request context; its actor becomes the principal.
            records: Already-loaded selection, in processing order.
            ids: Primary keys to load when *records* is not given.
            fields: Submitted values for the action's extra inputs.
            request: Transport request passed through to the handler.
            pk: Primary key attribute used with *ids*.

        Returns:
            The invocation's :class:`ActionResult`.

        Transactions:
            When *session* already has a transaction, the handler runs in a
            SAVEPOINT and committing stays with the caller. Otherwise the
            pipeline owns the transaction: it commits on success and rolls
            back every other outcome, so the session is left without an
            open transaction either way.

        Raises:
            ConfigurationError: No session was supplied, or *ids* were
                given for a resource without a model.
            ActionExecutionError: The handler (or the commit) raised; the
                transaction was rolled back and the original exception is
                ``__cause__``.
        """
        if session is None:
            raise ConfigurationError("ActionPipeline.run requires a session")

        owned = not session.in_transaction()
        try:
            return self._run(
                resource,
                action,
                session=session,
                owned=owned,
                context=context,
                records=records,
                ids=ids,
                fields=fields,
                request=request,
                pk=pk,
            )
        finally:
            if owned and session.in_transaction():
                session.rollback()

    def _run(
        self,
        resource: str | Resource,
        action: str | Action[Any],
        *,
        session: Session,
        owned: bool,
        context: PanelContext | None,
        records: Sequence[Any] | None,
        ids: Iterable[Any] | None,
        fields: Mapping[str, Any] | None,
        request: Any,
        pk: str,
    ) -> ActionResult:
        # 1. Resolve
        target = self._resolve_resource(resource)
        resource_slug = target.slug if target is not None else str(resource)
        action_slug = action.slug if isinstance(action, Action) else str(action)
        if target is None:
            return self._report(
                "not_found",
                resource_slug,
                action_slug,
                actor=context.actor if context is not None else None,
                message=f"Resource {resource_slug!r} is not registered",
            )
        descriptor = action if isinstance(action, Action) else target.find_action(action, context)
        if descriptor is None:
            return self._report(
                "not_found",
                resource_slug,
                action_slug,
                actor=context.actor if context is not None else None,
                message=f"Action {action_slug!r} not found",
            )

        if records is None:
            requested = list(ids or ())
            if requested and target.model is None:
                raise ConfigurationError(
                    f"Resource {resource_slug!r} has no model to load ids from"
                )
            try:
                records = load_records(session, target.model, requested, pk=pk)
            except RecordNotFoundError as exc:
                return self._report(
                    "not_found",
                    resource_slug,
                    action_slug,
                    actor=context.actor if context is not None else None,
                    message=str(exc),
                )

        ctx: ActionContext[Any] = ActionContext(
            records=records,
            fields=fields or {},
            actor=context.actor if context is not None else None,
            resource=resource_slug,
            session=session,
            request=request if request is not None else getattr(context, "request", None),
            registry=self.registry,
            context=context,
        )

        # 2. Authorize
        if ctx.actor is None or not descriptor.authorize(ctx):
            return self._report(
                "denied",
                resource_slug,
                action_slug,
                actor=ctx.actor,
                count=ctx.count,
                message="Action cannot be executed in this context",
            )

        # 3. Validate
        errors = self._validate(descriptor, ctx)
        if errors:
            return self._report(
                "invalid",
                resource_slug,
                action_slug,
                actor=ctx.actor,
                count=ctx.count,
                message="; ".join(errors.values()),
                errors=errors,
            )

        # 4. Execute
        try:
            with _transaction(session, owned):
                data = descriptor.execute(ctx)
                session.flush()
        except ActionValidationError as exc:
            return self._report(
                "invalid",
                resource_slug,
                action_slug,
                actor=ctx.actor,
                count=ctx.count,
                message=str(exc),
                errors=exc.errors,
            )
        except Exception as exc:
            log_action_failure(
                resource=resource_slug,
                action=action_slug,
                actor=ctx.actor,
                count=ctx.count,
                exc=exc,
            )
            raise ActionExecutionError(
                action=action_slug, resource=resource_slug, cause=exc
            ) from exc

        # 5. Report
        return self._report(
            "succeeded",
            resource_slug,
            action_slug,
            actor=ctx.actor,
            count=ctx.count,
            message=f"Action executed successfully on {ctx.count} item(s)",
            data=data,
        )

    def _resolve_resource(self, resource: str | Resource) -> Resource | None:
        if isinstance(resource, Resource):
            return resource
        return self.registry.get(resource)

    @staticmethod
    def _validate(descriptor: Action[Any], ctx: ActionContext[Any]) -> dict[str, str]:
        errors: dict[str, str] = {}
        if ctx.count == 0 and not descriptor.standalone:
            errors[""] = "No items selected"
        elif descriptor.sole and ctx.count > 1:
            errors[""] = "This action can only run on a single item"
        for input_field in descriptor.fields:
            messages = input_field.validate(ctx.fields.get(input_field.key))
            if messages:
                errors[input_field.key] = "; ".join(messages)
        return errors

    @staticmethod
    def _report(
        status: Any,
        resource: str,
        action: str,
        *,
        actor: Any,
        count: int = 0,
        message: str = "",
        errors: Mapping[str, str] | None = None,
        data: Any = None,
    ) -> ActionResult:
        result = ActionResult(
            status=status,
            resource=resource,
            action=action,
            count=count,
            message=message,
            errors=dict(errors or {}),
            data=data,
            actor=actor,
        )
        log_action_outcome(
            resource=resource,
            action=action,
            actor=actor,
            status=status,
            count=count,
            errors=result.errors,
        )
        return result


def run_action(
    resource: str | Resource,
    action: str | Action[Any],
    *,
    session: Session | None,
    context: PanelContext | None = None,
    records: Sequence[Any] | None = None,
    ids: Iterable[Any] | None = None,
    fields: Mapping[str, Any] | None = None,
    request: Any = None,
    registry: ResourceRegistry | None = None,
    pk: str = "id",
) -> ActionResult:
    """Run an action with a one-off :class:`ActionPipeline`.

    Example::

        result = run_action(
            products, "approve", records=selected, session=session, context=ctx
        )
    """
    return ActionPipeline(registry).run(
        resource,
        action,
        session=session,
        context=context,
        records=records,
        ids=ids,
        fields=fields,
        request=request,
        pk=pk,
    )
