"""
Approval decision engine.

Given a pending application, decides whether approval creates a new group
or merges into an existing one, ranks similar groups, surfaces orphan
products, and commits the reviewer's final member list and main ID.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from loguru import logger

from app.api.repository.applications_repository import ApplicationsRepository
from app.api.repository.groups_repository import GroupsRepository
from app.api.repository.products_repository import ProductsRepository
from app.core.config import Settings, get_settings
from app.core.exceptions import (
    ConflictError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)
from app.models import (
    Application,
    ApplicationType,
    DrugGroup,
    MatchType,
    MergeStrategy,
    Product,
    RxType,
)
from app.utils.helpers import (
    dedupe_ids,
    min_id,
    normalize_string,
    parse_product_ids,
    sorted_ids,
)


@dataclass
class SimilarGroup:
    """
    An existing group that looks like the same variety as the application.
    """

    group: DrugGroup
    match_type: MatchType
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "group_id": self.group.id,
            "group_name": self.group.name,
            "product_ids": list(self.group.product_ids),
            "match_type": self.match_type.value,
            "score": self.score,
        }


@dataclass
class ApprovalAnalysis:
    """
    Pre-approval state shown to the reviewer.

    Attributes:
        application: The pending application under review.
        strategy: Proposed strategy (NEW, MERGE, or DISSOLVE for UNBIND).
        target_group: Group a MERGE/DISSOLVE applies to, if any.
        forced: True when a direct membership match fixes the target group.
        group_name: Name of the group the approval will produce or update.
        candidates: Similar groups, best score first (LINK without direct match).
        orphans: Ungrouped products of the same name and rx type.
        seed_ids: Initial editable member list.
        default_main_id: Numerically smallest ID of ``seed_ids``.
    """

    application: Application
    strategy: MergeStrategy
    target_group: Optional[DrugGroup]
    forced: bool
    group_name: str
    candidates: list[SimilarGroup] = field(default_factory=list)
    orphans: list[Product] = field(default_factory=list)
    seed_ids: list[str] = field(default_factory=list)
    default_main_id: str = ""

    def candidate(self, group_id: str) -> Optional[SimilarGroup]:
        return next((c for c in self.candidates if c.group.id == group_id), None)

    def seed_for(self, group: Optional[DrugGroup]) -> list[str]:
        """Editable list the reviewer starts from when picking ``group``."""
        if group is None or group is self.target_group:
            return list(self.seed_ids)
        return merge_ids(self.application.product_ids, group.product_ids)


@dataclass
class ApprovalDecision:
    """
    Reviewer input for committing an approval.

    ``target_group_id`` None means NEW (unless a direct match forces MERGE).
    ``final_ids`` is free text or a list; None keeps the analysis seed.
    ``main_id`` None picks the numerically smallest final ID.
    """

    target_group_id: Optional[str] = None
    final_ids: Optional[str | list[str]] = None
    main_id: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class ApprovalOutcome:
    application: Application
    strategy: MergeStrategy
    group: Optional[DrugGroup] = None
    removed_group_ids: list[str] = field(default_factory=list)


@dataclass
class QueueEntry:
    application: Application
    products: list[Product]


def merge_ids(*id_lists: list[str]) -> list[str]:
    """Union of the lists, deduplicated and numerically sorted."""
    merged: list[str] = []
    for ids in id_lists:
        merged.extend(ids)
    return sorted_ids(dedupe_ids(merged))


class ApprovalService:
    """
    Service layer for compliance review.
    Handles analysis, approval commits and rejection.
    """

    def __init__(
        self,
        applications_repo: ApplicationsRepository,
        groups_repo: GroupsRepository,
        products_repo: ProductsRepository,
        settings: Settings | None = None,
    ):
        self.applications_repo = applications_repo
        self.groups_repo = groups_repo
        self.products_repo = products_repo
        self.settings = settings or get_settings()

    def queue(self) -> list[QueueEntry]:
        """Pending applications with their resolved product details."""
        return [
            QueueEntry(application=app, products=self.products_repo.resolve(app.product_ids))
            for app in self.applications_repo.pending()
        ]

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze(self, application_id: str) -> ApprovalAnalysis:
        """
        Decide the proposed strategy for a pending application.

        Args:
            application_id: ID of a PENDING application

        Returns:
            ApprovalAnalysis with strategy, candidates, orphans and seed list
        """
        application = self._get_pending(application_id)
        if application.type == ApplicationType.UNBIND:
            return self._analyze_unbind(application)

        representative = self._representative(application)
        orphans = self._find_orphans(application, representative)
        direct = self._direct_match(application)

        if direct is not None:
            seed = merge_ids(application.product_ids, direct.product_ids)
            analysis = ApprovalAnalysis(
                application=application,
                strategy=MergeStrategy.MERGE,
                target_group=direct,
                forced=True,
                group_name=direct.name,
                orphans=orphans,
                seed_ids=seed,
                default_main_id=min_id(seed),
            )
        else:
            seed = sorted_ids(application.product_ids)
            analysis = ApprovalAnalysis(
                application=application,
                strategy=MergeStrategy.NEW,
                target_group=None,
                forced=False,
                group_name=representative.name if representative else self.settings.default_group_name,
                candidates=self._find_similar_groups(representative),
                orphans=orphans,
                seed_ids=seed,
                default_main_id=min_id(seed),
            )

        logger.info(
            f"Analysis for {application.id}: strategy={analysis.strategy.value}, "
            f"target={analysis.target_group.id if analysis.target_group else None}, "
            f"candidates={len(analysis.candidates)}, orphans={len(analysis.orphans)}"
        )
        return analysis

    def _analyze_unbind(self, application: Application) -> ApprovalAnalysis:
        group = self._direct_match(application)
        if group is None:
            raise ValidationError(
                "None of the products belong to a group any more",
                product_ids=application.product_ids,
            )

        removed = set(application.product_ids)
        seed = [pid for pid in group.product_ids if pid not in removed]
        if len(seed) >= self.settings.group_min_members:
            strategy = MergeStrategy.MERGE
        else:
            strategy = MergeStrategy.DISSOLVE

        logger.info(
            f"Analysis for {application.id}: unbind from group {group.id}, "
            f"strategy={strategy.value}, remaining={len(seed)}"
        )
        return ApprovalAnalysis(
            application=application,
            strategy=strategy,
            target_group=group,
            forced=True,
            group_name=group.name,
            seed_ids=seed,
            default_main_id=min_id(seed),
        )

    def _direct_match(self, application: Application) -> Optional[DrugGroup]:
        for product_id in application.product_ids:
            group = self.groups_repo.find_containing(product_id)
            if group is not None:
                return group
        return None

    def _representative(self, application: Application) -> Optional[Product]:
        return self.products_repo.get_by_id(min_id(application.product_ids))

    def _group_profile(self, group: DrugGroup) -> tuple[str, Optional[RxType]]:
        """Name and rx type used to compare a group against an application."""
        product = self.products_repo.get_by_id(group.id)
        if product is None:
            product = next(
                (
                    self.products_repo.get_by_id(pid)
                    for pid in group.product_ids
                    if self.products_repo.exists(pid)
                ),
                None,
            )
        if product is None:
            return normalize_string(group.name), None
        return normalize_string(product.name), product.rx_type

    def _classify(
        self, name: str, rx_type: RxType, group_name: str, group_rx_type: Optional[RxType]
    ) -> Optional[tuple[MatchType, int]]:
        if not name or not group_name:
            return None
        if name == group_name:
            if rx_type == group_rx_type:
                return MatchType.EXACT, self.settings.similarity_exact_score
            return MatchType.NAME_ONLY, self.settings.similarity_name_score
        if name in group_name or group_name in name:
            return MatchType.FUZZY, self.settings.similarity_fuzzy_score
        return None

    def _find_similar_groups(self, representative: Optional[Product]) -> list[SimilarGroup]:
        if representative is None:
            return []

        name = normalize_string(representative.name)
        candidates = []
        for group in self.groups_repo.get_all():
            group_name, group_rx_type = self._group_profile(group)
            match = self._classify(name, representative.rx_type, group_name, group_rx_type)
            if match is not None:
                match_type, score = match
                candidates.append(SimilarGroup(group=group, match_type=match_type, score=score))

        # Stable sort keeps list order among equal scores
        candidates.sort(key=lambda c: c.score, reverse=True)
        if candidates:
            logger.debug(
                f"Similar groups for '{name}': "
                + ", ".join(f"{c.group.id}={c.match_type.value}" for c in candidates)
            )
        return candidates

    def _find_orphans(
        self, application: Application, representative: Optional[Product]
    ) -> list[Product]:
        if representative is None:
            return []

        excluded = self.groups_repo.grouped_ids() | set(application.product_ids)
        orphans = [
            product
            for product in self.products_repo.find_by_name_and_rx_type(
                representative.name, representative.rx_type
            )
            if product.id not in excluded
        ]
        by_id = {product.id: product for product in orphans}
        return [by_id[pid] for pid in sorted_ids(list(by_id))]

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def approve(self, application_id: str, decision: ApprovalDecision) -> ApprovalOutcome:
        """
        Commit the reviewer's decision for a pending application.

        Args:
            application_id: ID of a PENDING application
            decision: Target group, final member list, main ID and comment

        Returns:
            ApprovalOutcome describing the group that was created or changed

        Raises:
            ValidationError: Final list too short, main ID not a member, or an
                invalid target group
            ConflictError: Main ID already used by another group
        """
        analysis = self.analyze(application_id)
        application = analysis.application

        if analysis.strategy == MergeStrategy.DISSOLVE:
            return self._commit_dissolve(analysis, decision)

        target = self._resolve_target(analysis, decision.target_group_id)
        strategy = MergeStrategy.MERGE if target is not None else MergeStrategy.NEW

        final_ids = self._final_ids(analysis, target, decision.final_ids)
        main_id = (decision.main_id or "").strip() or min_id(final_ids)
        self._check_final_state(final_ids, main_id, target)
        self._warn_shared_members(final_ids, target)

        application.approve(decision.comment)
        if strategy == MergeStrategy.NEW:
            main_product = self.products_repo.get_by_id(main_id)
            group = DrugGroup(
                id=main_id,
                name=main_product.name if main_product else self.settings.default_group_name,
                product_ids=final_ids,
                created_at=date.today(),
            )
            self.groups_repo.add(group)
        else:
            target.replace(main_id, final_ids)
            group = target

        removed = []
        if application.type == ApplicationType.UNBIND:
            removed = self._strip_from_other_groups(application.product_ids, keep=group)

        logger.info(
            f"Application {application.id} approved: strategy={strategy.value}, "
            f"group={group.id}, members={len(group.product_ids)}"
        )
        return ApprovalOutcome(
            application=application,
            strategy=strategy,
            group=group,
            removed_group_ids=removed,
        )

    def reject(self, application_id: str, reason: str) -> Application:
        """
        Reject a pending application. Groups are never touched.

        Raises:
            NotFoundError: When the application does not exist
            InvalidStateTransitionError: When it is no longer pending
            ValidationError: When the reason is blank
        """
        application = self._get_pending(application_id)
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A rejection reason is required")

        application.reject(reason)
        logger.info(f"Application {application.id} rejected")
        return application

    def _resolve_target(
        self, analysis: ApprovalAnalysis, target_group_id: Optional[str]
    ) -> Optional[DrugGroup]:
        if analysis.forced:
            forced = analysis.target_group
            if target_group_id is not None and target_group_id != forced.id:
                raise ValidationError(
                    f"Products already belong to group {forced.id}; "
                    f"the application must be merged into it"
                )
            return forced

        if target_group_id is None:
            return None
        candidate = analysis.candidate(target_group_id)
        if candidate is None:
            if self.groups_repo.get_by_id(target_group_id) is None:
                raise NotFoundError(f"Group {target_group_id} not found", resource="group")
            raise ValidationError(
                f"Group {target_group_id} is not a similar group for this application"
            )
        return candidate.group

    def _final_ids(
        self,
        analysis: ApprovalAnalysis,
        target: Optional[DrugGroup],
        final_ids: Optional[str | list[str]],
    ) -> list[str]:
        if final_ids is None:
            return analysis.seed_for(target)
        if isinstance(final_ids, str):
            return parse_product_ids(final_ids)
        return dedupe_ids(final_ids)

    def _check_final_state(
        self, final_ids: list[str], main_id: str, target: Optional[DrugGroup]
    ) -> None:
        minimum = self.settings.group_min_members
        if len(final_ids) < minimum:
            raise ValidationError(f"A group needs at least {minimum} product IDs")
        if main_id not in final_ids:
            raise ValidationError(
                f"Main ID ({main_id}) must be included in the product ID list",
                product_ids=final_ids,
            )
        owner = self.groups_repo.get_by_id(main_id)
        if owner is not None and owner is not target:
            raise ConflictError(f"Main ID {main_id} is already the ID of group '{owner.name}'")

    def _warn_shared_members(self, final_ids: list[str], target: Optional[DrugGroup]) -> None:
        for group in self.groups_repo.get_all():
            if group is target:
                continue
            shared = [pid for pid in final_ids if group.contains(pid)]
            if shared:
                logger.warning(
                    f"Product(s) {shared} will also remain in group {group.id}"
                )

    def _commit_dissolve(
        self, analysis: ApprovalAnalysis, decision: ApprovalDecision
    ) -> ApprovalOutcome:
        application = analysis.application
        group = analysis.target_group

        application.approve(decision.comment)
        self.groups_repo.delete(group.id)
        removed = [group.id]
        removed += self._strip_from_other_groups(application.product_ids, keep=None)

        logger.info(
            f"Application {application.id} approved: group {group.id} dissolved"
        )
        return ApprovalOutcome(
            application=application,
            strategy=MergeStrategy.DISSOLVE,
            removed_group_ids=removed,
        )

    def _strip_from_other_groups(
        self, product_ids: list[str], keep: Optional[DrugGroup]
    ) -> list[str]:
        """Remove unbound IDs from any remaining group; drop groups left too small."""
        removed = []
        for group in list(self.groups_repo.get_all()):
            if group is keep or not any(group.contains(pid) for pid in product_ids):
                continue
            remaining = [pid for pid in group.product_ids if pid not in product_ids]
            if len(remaining) < self.settings.group_min_members:
                self.groups_repo.delete(group.id)
                removed.append(group.id)
                logger.info(f"Group {group.id} dissolved after unbind")
            else:
                main_id = group.id if group.id in remaining else min_id(remaining)
                group.replace(main_id, remaining)
        return removed

    def _get_pending(self, application_id: str) -> Application:
        application = self.applications_repo.get_by_id(application_id)
        if application is None:
            raise NotFoundError(
                f"Application {application_id} not found", resource="application"
            )
        if not application.is_pending:
            raise InvalidStateTransitionError(
                f"Application {application_id} is already {application.status.value}",
                current_status=application.status.value,
            )
        return application
