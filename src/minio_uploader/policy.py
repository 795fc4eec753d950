"""Bucket access policy documents."""

from typing import Literal

from pydantic import BaseModel, Field

POLICY_VERSION = "2012-10-17"


class PolicyPrincipal(BaseModel, frozen=True, populate_by_name=True):
    aws: list[str] = Field(default_factory=lambda: ["*"], alias="AWS")


class PolicyStatement(BaseModel, frozen=True, populate_by_name=True):
    """A single statement of an S3 bucket policy."""

    sid: str = Field(alias="Sid")
    effect: Literal["Allow", "Deny"] = Field(default="Allow", alias="Effect")
    principal: PolicyPrincipal = Field(
        default_factory=PolicyPrincipal, alias="Principal"
    )
    action: list[str] = Field(alias="Action")
    resource: list[str] = Field(alias="Resource")


class PolicyDocument(BaseModel, frozen=True, populate_by_name=True):
    """An S3 bucket policy, serialized with the field names MinIO expects."""

    version: str = Field(default=POLICY_VERSION, alias="Version")
    statement: list[PolicyStatement] = Field(alias="Statement")

    @classmethod
    def public_read(cls, bucket_name: str) -> "PolicyDocument":
        """
        Builds a policy that lets anonymous users read every object in the bucket.

        Args:
            bucket_name: The bucket the policy is assigned to.

        Returns:
            A policy granting `s3:GetObject` on `arn:aws:s3:::{bucket_name}/*`.
        """
        return cls(
            statement=[
                PolicyStatement(
                    sid="PublicReadGetObject",
                    action=["s3:GetObject"],
                    resource=[f"arn:aws:s3:::{bucket_name}/*"],
                )
            ]
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
