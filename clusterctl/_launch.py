# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from clusterctl._banner import print_banner
from clusterctl._session import ClusterSession
from clusterctl._terraform import TerraformProject
from runbook import Failure
from runbook import Runbook


def launch_cluster(runbook: Runbook, session: ClusterSession):
    """Create the cluster with the tectonic installer project.

    The first apply always fails half-way: some resources depend on
    resources created in the same apply. The second plan and apply finish.
    """
    print_banner(f"launching cluster {session.cluster_id}")
    config = session.config
    tectonic = TerraformProject(
        config.terraforming_path / 'projects/kubernetes-tectonic',
        session.aws_env(config.infra_profile),
        )
    runbook.run("Update terraform modules?", tectonic.get_update())
    print("\nSelect the correct workspace")
    runbook.run("Select workspace?", tectonic.workspace_select(session.cluster_id))
    print("\nPlan changes to kubernetes-tectonic")
    runbook.run("Plan?", tectonic.plan(session.tfvars()))
    print("\nApply kubernetes-tectonic")
    runbook.run("Apply? NOTE: An error is expected", tectonic.apply(), Failure())
    print("\nRe-plan changes to kubernetes-tectonic after expected error")
    runbook.run("Plan again?", tectonic.plan(session.tfvars()))
    print("\nRe-apply kubernetes-tectonic")
    runbook.run("Apply again?", tectonic.apply())
    print("\nEnjoy your new cluster :)")
